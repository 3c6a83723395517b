"""
SteamGridDB API Client for fetching game artwork

Requires: pip install python-steamgriddb aiohttp
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

import aiohttp
from steamgrid import SteamGridDB

from .errors import DownloadError, RemoteBatchQueryError, RemoteSearchError
from .utils.artwork import ArtworkType

logger = logging.getLogger(__name__)

# Per-call timeouts (seconds)
SEARCH_TIMEOUT = 30
IMAGE_QUERY_TIMEOUT = 30
DOWNLOAD_TIMEOUT = 60

# Concurrent per-game lookups inside one batched image query
MAX_CONCURRENT_QUERIES = 4


@dataclass
class ArtworkImage:
    """One downloadable SteamGridDB image"""
    game_id: int
    url: str
    image_id: Optional[int] = None


class SteamGridDBClient:
    """Client for searching games and fetching artwork from SteamGridDB"""

    def __init__(self, api_key: str, session: Optional[aiohttp.ClientSession] = None, client: Any = None):
        self.client = client if client is not None else SteamGridDB(api_key)
        self.session = session
        logger.info("[SGDB] SteamGridDB client initialized")

    async def _call(self, timeout: float, func, *args):
        """Run a blocking python-steamgriddb call in the thread pool, with a timeout"""
        loop = asyncio.get_running_loop()
        return await asyncio.wait_for(loop.run_in_executor(None, func, *args), timeout=timeout)

    async def search_game(self, title: str) -> Optional[int]:
        """Search for game by title and return the first match's game ID

        Returns:
            SteamGridDB game id, or None when nothing matched

        Raises:
            RemoteSearchError: the request failed or timed out
        """
        try:
            results = await self._call(SEARCH_TIMEOUT, self.client.search_game, title)
        except asyncio.TimeoutError as e:
            raise RemoteSearchError(f"Search for '{title}' timed out after {SEARCH_TIMEOUT}s") from e
        except Exception as e:
            raise RemoteSearchError(f"Error searching for game '{title}': {e}") from e

        if results:
            game_id = results[0].id
            logger.debug(f"[SGDB] Found SteamGridDB ID {game_id} for '{title}'")
            return game_id
        return None

    def select_best_artwork(self, assets: List) -> Optional[Any]:
        """
        Select the best artwork from a list of assets.
        Priority:
        1. Official/locked images (asset._lock == True)
        2. Highest score
        3. Best upvote/downvote ratio
        4. First result as fallback
        """
        if not assets:
            return None

        # Filter out NSFW/humor if desired
        filtered = [a for a in assets if not getattr(a, '_nsfw', False) and not getattr(a, '_humor', False)]
        if not filtered:
            filtered = assets  # Fall back to all if filtering removed everything

        # sorted() is stable, so equal candidates keep the API's order
        sorted_assets = sorted(
            filtered,
            key=lambda a: (
                not getattr(a, '_lock', False),
                -(getattr(a, 'score', 0) or 0),
                -(getattr(a, 'upvotes', 0) or 0) + (getattr(a, 'downvotes', 0) or 0)
            )
        )

        return sorted_assets[0]

    def _query_for(self, art_type: ArtworkType):
        if art_type is ArtworkType.HERO:
            return self.client.get_heroes_by_gameid
        if art_type is ArtworkType.GRID:
            return self.client.get_grids_by_gameid
        return self.client.get_logos_by_gameid

    async def get_images_for_ids(self, game_ids: Iterable[int], art_type: ArtworkType) -> Dict[int, ArtworkImage]:
        """Fetch the best image of one artwork type for several games.

        The result is keyed by SteamGridDB game id. Games without a usable
        image, and games whose lookup failed, are left out.

        Raises:
            RemoteBatchQueryError: every lookup in the batch failed
        """
        ids = list(dict.fromkeys(game_ids))
        if not ids:
            return {}

        query = self._query_for(art_type)
        semaphore = asyncio.Semaphore(MAX_CONCURRENT_QUERIES)

        async def fetch(game_id: int):
            async with semaphore:
                return await self._call(IMAGE_QUERY_TIMEOUT, query, [game_id])

        responses = await asyncio.gather(*(fetch(game_id) for game_id in ids), return_exceptions=True)

        images = {}
        errors = []
        for game_id, response in zip(ids, responses):
            if isinstance(response, BaseException):
                reason = 'timed out' if isinstance(response, asyncio.TimeoutError) else str(response)
                logger.warning(f"[SGDB] {art_type.value} query failed for game {game_id}: {reason}")
                errors.append(response)
                continue
            best = self.select_best_artwork(response or [])
            url = getattr(best, 'url', None) if best is not None else None
            if url:
                images[game_id] = ArtworkImage(game_id=game_id, url=url, image_id=getattr(best, 'id', None))

        if errors and len(errors) == len(ids):
            raise RemoteBatchQueryError(f"{art_type.value} query failed for all {len(ids)} game(s): {errors[0]}")

        return images

    async def download_image(self, url: str, save_path: str) -> bool:
        """Download image from URL to local path"""
        try:
            if self.session is not None:
                return await self._download(self.session, url, save_path)
            timeout = aiohttp.ClientTimeout(total=DOWNLOAD_TIMEOUT)
            async with aiohttp.ClientSession(timeout=timeout) as session:
                return await self._download(session, url, save_path)
        except DownloadError as e:
            logger.error(f"[SGDB] Failed to download {url}: {e}")
        except asyncio.TimeoutError:
            logger.error(f"[SGDB] Download of {url} timed out after {DOWNLOAD_TIMEOUT}s")
        except Exception as e:
            logger.error(f"[SGDB] Error downloading {url}: {e}")

        return False

    async def _download(self, session: aiohttp.ClientSession, url: str, save_path: str) -> bool:
        async with session.get(url) as response:
            if response.status != 200:
                raise DownloadError(f"HTTP {response.status}")
            content = await response.read()

        with open(save_path, 'wb') as f:
            f.write(content)
        logger.info(f"[SGDB] Downloaded {url} to {save_path}")
        return True
