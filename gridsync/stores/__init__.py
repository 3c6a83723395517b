"""Launcher platforms that report installed games."""

from .base import Platform, PlatformEntry
from .epic import EpicPlatform
from .legendary import LegendaryPlatform

__all__ = [
    'Platform',
    'PlatformEntry',
    'EpicPlatform',
    'LegendaryPlatform',
]
