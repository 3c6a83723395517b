"""
Epic Games Launcher platform.

Reads the launcher's install manifests (``*.item`` JSON files) directly; no
Epic login is needed.
"""
import glob
import json
import logging
import os
from typing import List, Optional

from ..errors import PlatformUnavailable
from ..utils.paths import DEFAULT_EPIC_MANIFESTS_DIR
from .base import Platform, PlatformEntry

logger = logging.getLogger(__name__)


class EpicPlatform(Platform):
    """Installed games from Epic Games Launcher manifests"""

    def __init__(self, settings):
        self.settings = settings

    @property
    def name(self) -> str:
        return 'Epic'

    def enabled(self) -> bool:
        return self.settings.enabled

    @property
    def manifests_dir(self) -> str:
        return self.settings.location or DEFAULT_EPIC_MANIFESTS_DIR

    async def get_shortcuts(self) -> List[PlatformEntry]:
        manifests_dir = self.manifests_dir
        if not os.path.isdir(manifests_dir):
            raise PlatformUnavailable(self.name, f"Manifests folder not found: {manifests_dir}")

        entries = []
        for manifest_path in sorted(glob.glob(os.path.join(manifests_dir, '*.item'))):
            try:
                with open(manifest_path, 'r', encoding='utf-8') as f:
                    manifest = json.load(f)
            except (OSError, ValueError) as e:
                raise PlatformUnavailable(self.name, f"Could not read manifest {manifest_path}: {e}") from e

            if not isinstance(manifest, dict):
                raise PlatformUnavailable(self.name, f"Manifest {manifest_path} is not a JSON object")

            entry = self._entry_from_manifest(manifest)
            if entry:
                entries.append(entry)
            else:
                logger.debug(f"[EPIC] Skipping manifest {os.path.basename(manifest_path)}")

        logger.info(f"[EPIC] Found {len(entries)} installed game(s) in {manifests_dir}")
        return entries

    def _entry_from_manifest(self, manifest: dict) -> Optional[PlatformEntry]:
        if manifest.get('bIsIncompleteInstall'):
            return None

        title = manifest.get('DisplayName')
        install_location = manifest.get('InstallLocation')
        launch_exe = manifest.get('LaunchExecutable')
        if not title or not install_location or not launch_exe:
            return None

        exe_path = os.path.join(install_location, launch_exe)
        return PlatformEntry(
            title=title,
            exe=f'"{exe_path}"',
            start_dir=f'"{install_location}"',
            launch_options=manifest.get('LaunchCommand', '') or '',
            platform_id=manifest.get('AppName', '') or '',
        )
