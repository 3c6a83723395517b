from .model import Shortcut, ShortcutCollection, generate_app_id
from .store import ShortcutStore
from .vdf import load_shortcuts_vdf, save_shortcuts_vdf
