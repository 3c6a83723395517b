"""
SyncService - Runs the shortcut and artwork sync for one Steam user.

Order per user: load shortcuts.vdf, merge every platform, write shortcuts.vdf
if anything changed, then fetch missing artwork. A storage failure ends that
user's run only.
"""

import logging
from typing import Any, Dict, List

from ..errors import StoreIOError
from ..shortcuts.merge import merge_platform_shortcuts
from ..shortcuts.store import ShortcutStore
from ..stores.base import Platform
from ..utils.steam_user import SteamUser

logger = logging.getLogger(__name__)


class SyncService:
    """Service that merges platform games and artwork into a user's Steam library."""

    def __init__(self, platforms: List[Platform], artwork_service=None):
        self.platforms = platforms
        self.artwork_service = artwork_service

    async def sync_user(self, user: SteamUser) -> Dict[str, Any]:
        """Sync one user; never raises for storage errors.

        Returns:
            dict: {success, user_id, shortcuts, platforms, artwork, error}
        """
        result = {
            'success': False,
            'user_id': user.user_id,
            'shortcuts': 0,
            'platforms': {},
            'artwork': None,
        }
        try:
            store = ShortcutStore(user)
            collection = store.load()
            before = collection.to_vdf()

            for platform in self.platforms:
                result['platforms'][platform.name] = await merge_platform_shortcuts(collection, platform)

            if collection.to_vdf() != before:
                store.save(collection)
            else:
                logger.info(f"[Sync] Shortcuts unchanged for user {user.user_id}")
            result['shortcuts'] = len(collection)

            if self.artwork_service:
                result['artwork'] = await self.artwork_service.sync_artwork(collection, user.grid_path)

            result['success'] = True
        except StoreIOError as e:
            logger.error(f"[Sync] Aborting user {user.user_id}: {e}")
            result['error'] = str(e)

        return result

    async def sync_users(self, users: List[SteamUser]) -> List[Dict[str, Any]]:
        results = []
        for user in users:
            logger.info(f"[Sync] Processing user {user.user_id}")
            results.append(await self.sync_user(user))
        return results
