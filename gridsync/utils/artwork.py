"""Artwork utilities for checking Steam grid artwork files."""

import os
import logging
from enum import Enum
from typing import Dict, Iterable, Set

from ..errors import StoreIOError

logger = logging.getLogger(__name__)


class ArtworkType(Enum):
    """The three artwork kinds downloaded for every shortcut"""
    HERO = 'hero'
    GRID = 'grid'
    LOGO = 'logo'

    def file_name(self, app_id: int) -> str:
        unsigned_id = convert_to_unsigned_appid(app_id)
        if self is ArtworkType.HERO:
            return f"{unsigned_id}_hero.png"
        if self is ArtworkType.GRID:
            return f"{unsigned_id}p.png"
        return f"{unsigned_id}_logo.png"


def convert_to_unsigned_appid(app_id: int) -> int:
    """Convert signed int32 app ID to unsigned for artwork filenames.

    Steam artwork files use unsigned app IDs even though shortcuts.vdf stores signed.
    Example: -1257913040 (signed) -> 3037054256 (unsigned)
    """
    return app_id if app_id >= 0 else app_id + 2**32


def list_local_artwork(grid_path: str) -> Set[str]:
    """List the file names already present in a user's grid folder.

    The folder is created when missing.

    Raises:
        StoreIOError: the folder can't be created or listed
    """
    try:
        os.makedirs(grid_path, exist_ok=True)
        return set(os.listdir(grid_path))
    except OSError as e:
        raise StoreIOError(f"Cannot read grid folder {grid_path}: {e}") from e


def get_missing_artwork_types(known_files: Iterable[str], app_id: int) -> Set[ArtworkType]:
    """Artwork types whose conventional file is absent for this app_id."""
    known = known_files if isinstance(known_files, (set, frozenset)) else set(known_files)
    return {art_type for art_type in ArtworkType if art_type.file_name(app_id) not in known}


def get_artwork_paths(grid_path: str, app_id: int) -> Dict[ArtworkType, str]:
    """Get paths for all artwork types for a given app ID."""
    return {art_type: os.path.join(grid_path, art_type.file_name(app_id)) for art_type in ArtworkType}
