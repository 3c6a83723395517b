"""
Base Platform class defining the interface for all launcher platforms.

Each platform (Epic, Legendary) inherits from this and reports the games it
has installed. Its ``name`` doubles as the shortcut tag used for merging.
"""
from abc import ABC, abstractmethod
from typing import List
from dataclasses import dataclass
import logging

from ..shortcuts.model import Shortcut, generate_app_id


logger = logging.getLogger(__name__)


@dataclass
class PlatformEntry:
    """Represents an installed game reported by a platform"""
    title: str
    exe: str
    start_dir: str = ''
    launch_options: str = ''
    platform_id: str = ''  # Store-specific game id (e.g. legendary app_name)

    def to_shortcut(self, tag: str) -> Shortcut:
        return Shortcut(
            app_id=generate_app_id(self.exe, self.title),
            app_name=self.title,
            exe=self.exe,
            start_dir=self.start_dir,
            launch_options=self.launch_options,
            tags=[tag],
        )


class Platform(ABC):
    """
    Abstract base class for launcher platforms.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the platform tag (e.g., 'Epic', 'Legendary')"""
        pass

    @abstractmethod
    def enabled(self) -> bool:
        """Whether this platform is turned on in the settings."""
        pass

    @abstractmethod
    async def get_shortcuts(self) -> List[PlatformEntry]:
        """
        Get the games currently installed through this platform.

        Returns:
            List of PlatformEntry, possibly empty.

        Raises:
            PlatformUnavailable: manifests or launcher can't be read.
        """
        pass
