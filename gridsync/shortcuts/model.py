"""Shortcut model for Steam non-Steam-game entries."""

import binascii
import struct
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


def generate_app_id(exe: str, app_name: str) -> int:
    """Generate the (unsigned) AppID Steam computes for a non-Steam shortcut using CRC32"""
    key = f"{exe}{app_name}"
    crc = binascii.crc32(key.encode('utf-8')) & 0xFFFFFFFF
    return crc | 0x80000000


def to_signed_appid(app_id: int) -> int:
    """shortcuts.vdf stores appid as a signed int32"""
    return struct.unpack('i', struct.pack('I', app_id & 0xFFFFFFFF))[0]


@dataclass
class Shortcut:
    """One entry of a user's shortcuts.vdf.

    Fields gridsync does not understand are kept in ``extra`` and written back
    unchanged.
    """
    app_id: int
    app_name: str
    exe: str
    start_dir: str = ''
    launch_options: str = ''
    tags: List[str] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)
    name_key: str = 'AppName'

    @classmethod
    def from_vdf(cls, data: Dict[str, Any]) -> 'Shortcut':
        raw = dict(data)
        name_key = 'appname' if 'appname' in raw and 'AppName' not in raw else 'AppName'
        app_name = raw.pop(name_key, '') or ''
        exe = raw.pop('exe', '') or ''
        app_id = raw.pop('appid', None)
        tags = raw.pop('tags', {}) or {}
        if isinstance(tags, dict):
            tag_values = [str(v) for _, v in sorted(tags.items(), key=lambda kv: _tag_index(kv[0]))]
        else:
            tag_values = [str(t) for t in tags]

        return cls(
            app_id=(app_id & 0xFFFFFFFF) if app_id is not None else generate_app_id(exe, app_name),
            app_name=app_name,
            exe=exe,
            start_dir=raw.pop('StartDir', '') or '',
            launch_options=raw.pop('LaunchOptions', '') or '',
            tags=tag_values,
            extra=raw,
            name_key=name_key,
        )

    def to_vdf(self) -> Dict[str, Any]:
        data = {
            'appid': to_signed_appid(self.app_id),
            self.name_key: self.app_name,
            'exe': self.exe,
            'StartDir': self.start_dir,
            'LaunchOptions': self.launch_options,
        }
        data.update(self.extra)
        data['tags'] = {str(i): t for i, t in enumerate(self.tags)}
        return data

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags


def _tag_index(key: Any) -> int:
    try:
        return int(key)
    except (TypeError, ValueError):
        return 0


class ShortcutCollection:
    """In-memory shortcuts of one Steam user, in file order.

    ``add`` refuses a second shortcut for an app_id already present. Shortcuts
    loaded from disk are kept as found.
    """

    def __init__(self, shortcuts: Optional[List[Shortcut]] = None):
        self._shortcuts: List[Shortcut] = list(shortcuts or [])

    def __iter__(self):
        return iter(self._shortcuts)

    def __len__(self) -> int:
        return len(self._shortcuts)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ShortcutCollection):
            return NotImplemented
        return self.to_vdf() == other.to_vdf()

    def get(self, app_id: int) -> Optional[Shortcut]:
        for shortcut in self._shortcuts:
            if shortcut.app_id == app_id:
                return shortcut
        return None

    def add(self, shortcut: Shortcut) -> bool:
        """Append a shortcut. Returns False if its app_id is already taken."""
        if self.get(shortcut.app_id) is not None:
            return False
        self._shortcuts.append(shortcut)
        return True

    def remove_tagged(self, tag: str) -> List[Shortcut]:
        """Remove every shortcut carrying ``tag`` and return them."""
        removed = [s for s in self._shortcuts if s.has_tag(tag)]
        self._shortcuts = [s for s in self._shortcuts if not s.has_tag(tag)]
        return removed

    @classmethod
    def from_vdf(cls, data: Dict[str, Any]) -> 'ShortcutCollection':
        entries = (data or {}).get('shortcuts', {}) or {}
        ordered = sorted(entries.items(), key=lambda kv: _tag_index(kv[0]))
        return cls([Shortcut.from_vdf(entry) for _, entry in ordered])

    def to_vdf(self) -> Dict[str, Any]:
        return {'shortcuts': {str(i): s.to_vdf() for i, s in enumerate(self._shortcuts)}}
