#!/usr/bin/env python3
"""
gridsync - add installed Epic / Legendary games to Steam with artwork.

Usage:
  1. Close Steam completely: killall steam
  2. Run: gridsync  (or python3 -m gridsync.main)
  3. Start Steam: steam &

Each Steam user's shortcuts.vdf is updated independently; missing hero, grid
and logo images are downloaded from SteamGridDB into config/grid.
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

import aiohttp

from .cache.search_cache import CachedSearch
from .errors import GridSyncError, StoreIOError
from .services.artwork_service import ArtworkService
from .services.sync_service import SyncService
from .settings import Settings, load_settings
from .steamgriddb_client import DOWNLOAD_TIMEOUT, SteamGridDBClient
from .stores import EpicPlatform, LegendaryPlatform
from .utils.steam_user import get_steam_users

logger = logging.getLogger("gridsync")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="gridsync",
        description="Add installed Epic Games / Legendary games to Steam and download their artwork",
    )
    parser.add_argument("--settings", help="Path to settings.json")
    parser.add_argument("--steam-path", help="Steam installation directory (overrides settings)")
    parser.add_argument("--cache", help="Path to the SteamGridDB search cache")
    parser.add_argument("--no-artwork", action="store_true", help="Only update shortcuts, skip SteamGridDB")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


async def run(settings: Settings, args: argparse.Namespace) -> int:
    """Sync every Steam user. Returns the process exit code."""
    artwork_enabled = settings.steamgriddb.enabled and not args.no_artwork
    if artwork_enabled and not settings.steamgriddb.api_key:
        logger.error("api_key not found, please add it to the steamgriddb settings or set STEAMGRIDDB_API_KEY")
        return 1

    try:
        users = get_steam_users(args.steam_path or settings.steam.location)
    except GridSyncError as e:
        logger.error(str(e))
        return 1

    platforms = [
        EpicPlatform(settings.epic_games),
        LegendaryPlatform(settings.legendary),
    ]

    if not artwork_enabled:
        results = await SyncService(platforms).sync_users(users)
        return _exit_code(results)

    timeout = aiohttp.ClientTimeout(total=DOWNLOAD_TIMEOUT)
    async with aiohttp.ClientSession(timeout=timeout) as session:
        client = SteamGridDBClient(settings.steamgriddb.api_key, session=session)
        try:
            with CachedSearch(client, args.cache) as search:
                service = SyncService(platforms, ArtworkService(client, search))
                results = await service.sync_users(users)
        except StoreIOError as e:
            logger.error(f"Search cache error: {e}")
            return 1

    return _exit_code(results)


def _exit_code(results) -> int:
    failed = [r['user_id'] for r in results if not r['success']]
    if failed:
        logger.error(f"Sync failed for user(s): {', '.join(failed)}")
        return 1
    logger.info(f"Synced {len(results)} user(s)")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )
    settings = load_settings(args.settings)
    return asyncio.run(run(settings, args))


if __name__ == '__main__':
    sys.exit(main())
