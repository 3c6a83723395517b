"""SteamGridDB search cache.

Stores mapping of shortcut appid -> SteamGridDB game id, with ``null`` for
games SteamGridDB has no match for. Lives in user data
(~/.local/share/gridsync) so it survives across runs; a cached appid is never
searched again.
"""

import json
import logging
import os
import tempfile
from typing import Dict, Optional

from ..errors import StoreIOError
from ..utils.paths import SEARCH_CACHE_PATH

logger = logging.getLogger(__name__)


def load_search_cache(path: str) -> Dict[int, Optional[int]]:
    """Load search results from cache file. Returns {app_id: sgdb_id or None}."""
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as e:
        raise StoreIOError(f"Error loading search cache {path}: {e}") from e

    # Cache is stored with string keys; convert to int keys.
    try:
        return {int(k): (int(v) if v is not None else None) for k, v in data.items()}
    except (AttributeError, TypeError, ValueError) as e:
        raise StoreIOError(f"Malformed search cache {path}: {e}") from e


def save_search_cache(path: str, cache: Dict[int, Optional[int]]) -> None:
    """Save search results, replacing the cache file atomically."""
    directory = os.path.dirname(path) or "."
    try:
        os.makedirs(directory, exist_ok=True)
        serializable = {str(k): v for k, v in sorted(cache.items())}
        fd, tmp_path = tempfile.mkstemp(prefix=".search_cache.", dir=directory)
        try:
            with os.fdopen(fd, "w") as f:
                json.dump(serializable, f, indent=2)
            os.replace(tmp_path, path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise
    except OSError as e:
        raise StoreIOError(f"Error saving search cache {path}: {e}") from e
    logger.info(f"Saved {len(cache)} search results to cache")


class CachedSearch:
    """SteamGridDB search in front of a persistent appid cache.

    Use as a context manager so the cache is flushed even when a run ends
    early::

        with CachedSearch(client) as search:
            sgdb_id = await search.resolve(app_id, app_name)
    """

    def __init__(self, client, path: Optional[str] = None):
        self.client = client
        self.path = path or SEARCH_CACHE_PATH
        self._cache: Dict[int, Optional[int]] = {}
        self._loaded = False
        self._dirty = False

    def __enter__(self) -> 'CachedSearch':
        self.load()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.save()

    def __contains__(self, app_id: int) -> bool:
        return app_id in self._cache

    def load(self) -> None:
        self._cache = load_search_cache(self.path)
        self._loaded = True
        self._dirty = False
        logger.info(f"Loaded {len(self._cache)} cached search results from {self.path}")

    async def resolve(self, app_id: int, app_name: str) -> Optional[int]:
        """SteamGridDB game id for a shortcut, or None if SteamGridDB has no match.

        Only the first lookup of an app_id reaches the network; the result,
        including a miss, is cached.

        Raises:
            RemoteSearchError: the search failed; nothing is cached
        """
        if not self._loaded:
            self.load()

        if app_id in self._cache:
            return self._cache[app_id]

        logger.info(f"Searching for {app_name}")
        result = await self.client.search_game(app_name)
        self._cache[app_id] = result
        self._dirty = True
        if result is None:
            logger.info(f"No SteamGridDB match for '{app_name}' ({app_id})")
        return result

    def save(self) -> None:
        """Write the whole cache to disk if anything changed since loading."""
        if not self._dirty:
            return
        save_search_cache(self.path, self._cache)
        self._dirty = False
