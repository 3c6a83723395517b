"""
Steam User Discovery Utilities

Lists the Steam accounts that have a userdata folder. Every account is
processed independently; folder ``0`` is Steam's meta-directory and is never
treated as a real user.
"""

import os
import logging
from dataclasses import dataclass
from typing import List, Optional

from ..errors import SteamFolderNotFound, SteamUsersDataEmpty
from .paths import find_steam_path

logger = logging.getLogger(__name__)


@dataclass
class SteamUser:
    """One Steam account's userdata folder"""
    user_id: str
    userdata_path: str

    @property
    def config_path(self) -> str:
        return os.path.join(self.userdata_path, "config")

    @property
    def shortcuts_path(self) -> str:
        return os.path.join(self.config_path, "shortcuts.vdf")

    @property
    def grid_path(self) -> str:
        return os.path.join(self.config_path, "grid")


def get_steam_users(steam_path: Optional[str] = None) -> List[SteamUser]:
    """
    Get every Steam user that has a userdata folder.

    Args:
        steam_path: Path to Steam installation (auto-detected if None)

    Returns:
        List of SteamUser sorted by user id

    Raises:
        SteamFolderNotFound: userdata folder does not exist
        SteamUsersDataEmpty: userdata folder holds no user
    """
    if steam_path is None:
        steam_path = find_steam_path()

    userdata_path = os.path.join(steam_path, "userdata") if steam_path else "~/.steam/steam/userdata"
    if not os.path.isdir(userdata_path):
        raise SteamFolderNotFound(userdata_path)

    users = []
    for entry in sorted(os.listdir(userdata_path)):
        folder = os.path.join(userdata_path, entry)
        if not os.path.isdir(folder) or not entry.isdigit():
            continue
        # Safety check: never use user 0
        if entry == '0':
            logger.debug("[SteamUser] Skipping meta-directory userdata/0")
            continue
        users.append(SteamUser(user_id=entry, userdata_path=folder))

    if not users:
        raise SteamUsersDataEmpty(userdata_path)

    logger.info(f"[SteamUser] Found {len(users)} user(s) in {userdata_path}")
    return users
