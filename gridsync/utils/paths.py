"""gridsync file path constants and Steam location helpers."""

import os
from typing import List, Optional


# gridsync data directory
GRIDSYNC_DATA_DIR = os.path.expanduser("~/.local/share/gridsync")

# Cache and settings files
SETTINGS_PATH = os.path.join(GRIDSYNC_DATA_DIR, "settings.json")
SEARCH_CACHE_PATH = os.path.join(GRIDSYNC_DATA_DIR, "search_cache.json")

# Epic Games Launcher manifests (Windows install)
DEFAULT_EPIC_MANIFESTS_DIR = r"C:\ProgramData\Epic\EpicGamesLauncher\Data\Manifests"

# Legendary fallback location when not on PATH
LOCAL_BIN_LEGENDARY = os.path.expanduser("~/.local/bin/legendary")


def get_steam_path_candidates() -> List[str]:
    """Possible Steam installation directories, most likely first."""
    candidates = [
        os.path.expanduser("~/.steam/steam"),
        os.path.expanduser("~/.local/share/Steam"),
    ]
    program_files = os.environ.get("PROGRAMFILES(X86)")
    if program_files:
        candidates.append(os.path.join(program_files, "Steam"))
    return candidates


def find_steam_path() -> Optional[str]:
    """Find Steam installation directory"""
    for path in get_steam_path_candidates():
        if os.path.isdir(os.path.join(path, "userdata")):
            return path
    return None
