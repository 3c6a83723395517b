"""
ArtworkService - Fills in missing Steam grid artwork for shortcuts.

Responsibilities:
- Identify which artwork types (hero, grid, logo) are missing per shortcut
- Resolve missing shortcuts to SteamGridDB games through the search cache
- Query SteamGridDB once per artwork type for every game that still needs it
- Download the selected images with semaphore control
"""

import asyncio
import logging
from typing import Any, Dict, Iterable, List, Optional

from ..errors import RemoteBatchQueryError, RemoteSearchError
from ..shortcuts.model import Shortcut
from ..utils.artwork import ArtworkType, get_artwork_paths, get_missing_artwork_types, list_local_artwork

logger = logging.getLogger(__name__)

# Parallel image downloads per artwork type
MAX_CONCURRENT_DOWNLOADS = 4


class ArtworkService:
    """Service for fetching missing artwork of one user's shortcuts."""

    def __init__(self, steamgriddb_client, search):
        """Initialize ArtworkService.

        Args:
            steamgriddb_client: SteamGridDBClient used for image queries and downloads
            search: CachedSearch resolving shortcuts to SteamGridDB game ids
        """
        self.steamgriddb = steamgriddb_client
        self.search = search

    async def sync_artwork(self, shortcuts: Iterable[Shortcut], grid_path: str) -> Dict[str, Any]:
        """Download every missing artwork file for ``shortcuts`` into ``grid_path``.

        Returns:
            dict: {searched, not_found, downloaded, failed: [{app_id, type, reason}]}

        Raises:
            StoreIOError: the grid folder can't be read
        """
        shortcuts = list(shortcuts)
        known_images = list_local_artwork(grid_path)
        result = {'searched': 0, 'not_found': 0, 'downloaded': 0, 'failed': []}

        missing = {s.app_id: get_missing_artwork_types(known_images, s.app_id) for s in shortcuts}
        to_search = [s for s in shortcuts if missing[s.app_id]]
        if not to_search:
            logger.info("[Artwork] All shortcuts already have artwork")
            return result

        search_results = await self._resolve(to_search, result)

        for art_type in (ArtworkType.LOGO, ArtworkType.HERO, ArtworkType.GRID):
            needed = [
                s for s in shortcuts
                if search_results.get(s.app_id) is not None and art_type in missing[s.app_id]
            ]
            if needed:
                await self._fetch_type(art_type, needed, search_results, grid_path, result)

        logger.info(
            f"[Artwork] {result['downloaded']} downloaded, {result['not_found']} not on SteamGridDB, "
            f"{len(result['failed'])} failed"
        )
        return result

    async def _resolve(self, shortcuts: List[Shortcut], result: Dict[str, Any]) -> Dict[int, Optional[int]]:
        """Look up each shortcut one at a time through the search cache."""
        search_results = {}
        for shortcut in shortcuts:
            try:
                sgdb_id = await self.search.resolve(shortcut.app_id, shortcut.app_name)
            except RemoteSearchError as e:
                logger.warning(f"[Artwork] Search failed for {shortcut.app_name} ({shortcut.app_id}): {e}")
                result['failed'].append({'app_id': shortcut.app_id, 'type': None, 'reason': str(e)})
                continue

            result['searched'] += 1
            if sgdb_id is None:
                result['not_found'] += 1
            search_results[shortcut.app_id] = sgdb_id
        return search_results

    async def _fetch_type(
        self,
        art_type: ArtworkType,
        needed: List[Shortcut],
        search_results: Dict[int, Optional[int]],
        grid_path: str,
        result: Dict[str, Any],
    ) -> None:
        sgdb_ids = [search_results[s.app_id] for s in needed]
        try:
            images = await self.steamgriddb.get_images_for_ids(sgdb_ids, art_type)
        except RemoteBatchQueryError as e:
            logger.error(f"[Artwork] Error getting {art_type.value} images, skipping until next run: {e}")
            for s in needed:
                result['failed'].append({'app_id': s.app_id, 'type': art_type.value, 'reason': str(e)})
            return

        semaphore = asyncio.Semaphore(MAX_CONCURRENT_DOWNLOADS)

        async def download(url: str, path: str) -> bool:
            async with semaphore:
                logger.info(f"Downloading {url} to {path}")
                return await self.steamgriddb.download_image(url, path)

        tasks = []
        targets = []
        for shortcut in needed:
            # Match by SteamGridDB id; the response may skip or reorder games
            image = images.get(search_results[shortcut.app_id])
            if image is None or not image.url:
                # Absent when SteamGridDB has no image or this game's lookup failed
                reason = f"no {art_type.value} image returned for SteamGridDB game {search_results[shortcut.app_id]}"
                logger.warning(f"[Artwork] Skipping {art_type.value} for {shortcut.app_name} ({shortcut.app_id}): {reason}")
                result['failed'].append({'app_id': shortcut.app_id, 'type': art_type.value, 'reason': reason})
                continue
            path = get_artwork_paths(grid_path, shortcut.app_id)[art_type]
            tasks.append(download(image.url, path))
            targets.append(shortcut)

        outcomes = await asyncio.gather(*tasks, return_exceptions=True)
        for shortcut, outcome in zip(targets, outcomes):
            if outcome is True:
                result['downloaded'] += 1
                continue
            reason = str(outcome) if isinstance(outcome, BaseException) else 'download failed'
            logger.warning(f"[Artwork] Skipping {art_type.value} for {shortcut.app_name} ({shortcut.app_id}): {reason}")
            result['failed'].append({'app_id': shortcut.app_id, 'type': art_type.value, 'reason': reason})
