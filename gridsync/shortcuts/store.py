"""Round trip of one Steam user's shortcut collection."""

import logging
import os
from collections import Counter

from ..utils.steam_user import SteamUser
from .model import ShortcutCollection
from .vdf import load_shortcuts_vdf, save_shortcuts_vdf

logger = logging.getLogger(__name__)


class ShortcutStore:
    """Reads and writes ``config/shortcuts.vdf`` for a single Steam user."""

    def __init__(self, user: SteamUser):
        self.user = user
        self.path = user.shortcuts_path

    def load(self) -> ShortcutCollection:
        """Load the user's shortcuts, or an empty collection if the file doesn't exist yet."""
        data = load_shortcuts_vdf(self.path)
        collection = ShortcutCollection.from_vdf(data)
        if os.path.exists(self.path):
            logger.info(f"Found {len(collection)} shortcuts, for user: {self.user.user_id}")
        else:
            logger.info(f"Did not find shortcuts for user {self.user.user_id}, a new file will be created")

        duplicates = [app_id for app_id, n in Counter(s.app_id for s in collection).items() if n > 1]
        if duplicates:
            logger.warning(f"User {self.user.user_id} has duplicate shortcut appids: {duplicates}")
        return collection

    def save(self, collection: ShortcutCollection) -> None:
        save_shortcuts_vdf(self.path, collection.to_vdf())
        logger.info(f"Wrote {len(collection)} shortcuts to {self.path}")
