"""
Settings loading.

Settings live in a JSON file (~/.local/share/gridsync/settings.json by
default). Every field has a default, so a missing or partial file is fine.
STEAMGRIDDB_API_KEY in the environment overrides the stored API key.
"""

import json
import logging
import os
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional

from .utils.paths import SETTINGS_PATH

logger = logging.getLogger(__name__)

API_KEY_ENV = "STEAMGRIDDB_API_KEY"


@dataclass
class SteamSettings:
    location: Optional[str] = None


@dataclass
class SteamGridDBSettings:
    enabled: bool = True
    api_key: Optional[str] = None


@dataclass
class EpicGamesSettings:
    enabled: bool = True
    location: Optional[str] = None  # Manifests folder


@dataclass
class LegendarySettings:
    enabled: bool = True
    executable: Optional[str] = None


@dataclass
class Settings:
    steam: SteamSettings = field(default_factory=SteamSettings)
    steamgriddb: SteamGridDBSettings = field(default_factory=SteamGridDBSettings)
    epic_games: EpicGamesSettings = field(default_factory=EpicGamesSettings)
    legendary: LegendarySettings = field(default_factory=LegendarySettings)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Settings':
        settings = cls()
        for section in fields(cls):
            values = data.get(section.name)
            if not isinstance(values, dict):
                continue
            target = getattr(settings, section.name)
            known = {f.name for f in fields(target)}
            for key, value in values.items():
                if key in known:
                    setattr(target, key, value)
                else:
                    logger.warning(f"Ignoring unknown setting {section.name}.{key}")
        return settings


def load_settings(path: Optional[str] = None) -> Settings:
    """Load settings from the settings file, falling back to defaults."""
    path = path or SETTINGS_PATH
    settings = Settings()
    try:
        if os.path.exists(path):
            with open(path, 'r') as f:
                settings = Settings.from_dict(json.load(f))
            logger.info(f"Loaded settings from {path}")
    except Exception as e:
        logger.error(f"Error loading settings from {path}, using defaults: {e}")

    api_key = os.environ.get(API_KEY_ENV)
    if api_key:
        settings.steamgriddb.api_key = api_key
    return settings
