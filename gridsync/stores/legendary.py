"""
Legendary platform.

Lists Epic games installed through the legendary CLI and launches them with
``legendary launch <app_name>``.
"""
import asyncio
import json
import logging
import os
import shutil
from typing import List, Optional

from ..errors import PlatformUnavailable
from ..utils.paths import LOCAL_BIN_LEGENDARY
from .base import Platform, PlatformEntry

logger = logging.getLogger(__name__)

# Seconds to wait for `legendary list-installed`
LEGENDARY_TIMEOUT = 60


class LegendaryPlatform(Platform):
    """Handles games installed via legendary CLI"""

    def __init__(self, settings):
        self.settings = settings

    @property
    def name(self) -> str:
        return 'Legendary'

    def enabled(self) -> bool:
        return self.settings.enabled

    def _find_legendary(self) -> Optional[str]:
        """Find legendary executable - checks configured path first, then system"""
        # Priority 1: Configured executable
        if self.settings.executable:
            configured = os.path.expanduser(self.settings.executable)
            if os.path.isfile(configured):
                return configured
            logger.warning(f"[Legendary] Configured executable not found: {configured}")

        # Priority 2: Check system PATH
        legendary_path = shutil.which("legendary")
        if legendary_path:
            return legendary_path

        # Priority 3: Check ~/.local/bin explicitly
        if os.path.exists(LOCAL_BIN_LEGENDARY):
            return LOCAL_BIN_LEGENDARY

        return None

    async def get_shortcuts(self) -> List[PlatformEntry]:
        legendary_bin = self._find_legendary()
        if not legendary_bin:
            raise PlatformUnavailable(self.name, "legendary not found (install with: pip install --user legendary-gl)")

        try:
            proc = await asyncio.create_subprocess_exec(
                legendary_bin, 'list-installed', '--json',
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE
            )
        except OSError as e:
            raise PlatformUnavailable(self.name, f"Could not run {legendary_bin}: {e}") from e

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=LEGENDARY_TIMEOUT)
        except asyncio.TimeoutError:
            proc.kill()
            await proc.wait()
            raise PlatformUnavailable(self.name, f"legendary list-installed timed out after {LEGENDARY_TIMEOUT}s")

        if proc.returncode != 0:
            raise PlatformUnavailable(self.name, f"legendary list-installed failed: {stderr.decode(errors='replace').strip()}")

        try:
            games_data = json.loads(stdout.decode(errors='replace'))
        except ValueError as e:
            raise PlatformUnavailable(self.name, f"Invalid JSON from legendary: {e}") from e

        if games_data is None:
            games_data = []
        if not isinstance(games_data, list):
            raise PlatformUnavailable(self.name, f"Expected a list from legendary list-installed, got {type(games_data).__name__}")

        entries = []
        for game in games_data:
            if not isinstance(game, dict):
                logger.warning(f"[Legendary] Skipping malformed entry: {game!r}")
                continue
            app_name = game.get('app_name')
            title = game.get('title') or app_name
            if not app_name:
                continue
            entries.append(PlatformEntry(
                title=title,
                exe=f'"{legendary_bin}"',
                start_dir=f'"{game.get("install_path", "")}"',
                launch_options=f'launch {app_name}',
                platform_id=app_name,
            ))

        logger.info(f"[Legendary] Found {len(entries)} installed game(s)")
        return entries
