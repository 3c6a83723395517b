"""
Tests for merging platform games into a shortcut collection.
"""
import pytest

from gridsync.errors import PlatformUnavailable
from gridsync.shortcuts.merge import merge_platform_shortcuts
from gridsync.shortcuts.model import Shortcut, ShortcutCollection
from gridsync.stores.base import Platform, PlatformEntry


class FakePlatform(Platform):
    def __init__(self, name, entries=None, error=None, is_enabled=True):
        self._name = name
        self.entries = entries or []
        self.error = error
        self.is_enabled = is_enabled
        self.calls = 0

    @property
    def name(self):
        return self._name

    def enabled(self):
        return self.is_enabled

    async def get_shortcuts(self):
        self.calls += 1
        if self.error:
            raise self.error
        return list(self.entries)


def manual_shortcut():
    return Shortcut(app_id=1, app_name='Manual Game', exe='"/usr/bin/manual"')


@pytest.mark.asyncio
async def test_merge_keeps_manual_shortcut():
    collection = ShortcutCollection([manual_shortcut()])
    platform = FakePlatform('Epic', [PlatformEntry(title='Game A', exe='"/games/a.exe"')])

    result = await merge_platform_shortcuts(collection, platform)

    shortcuts = list(collection)
    assert result['success'] is True
    assert result['added'] == 1
    assert len(shortcuts) == 2
    assert shortcuts[0].app_id == 1
    assert shortcuts[0].tags == []
    assert shortcuts[1].app_name == 'Game A'
    assert shortcuts[1].tags == ['Epic']


@pytest.mark.asyncio
async def test_merge_removes_uninstalled_game():
    collection = ShortcutCollection([Shortcut(app_id=2, app_name='Old', exe='old', tags=['Epic'])])

    result = await merge_platform_shortcuts(collection, FakePlatform('Epic', []))

    assert result['removed'] == 1
    assert len(collection) == 0


@pytest.mark.asyncio
async def test_merge_twice_is_idempotent():
    entries = [
        PlatformEntry(title='Game A', exe='"/games/a.exe"'),
        PlatformEntry(title='Game B', exe='"/games/b.exe"', launch_options='-skip'),
    ]
    collection = ShortcutCollection([manual_shortcut()])
    platform = FakePlatform('Epic', entries)

    await merge_platform_shortcuts(collection, platform)
    first = collection.to_vdf()
    await merge_platform_shortcuts(collection, platform)

    assert collection.to_vdf() == first
    assert len(collection) == 3


@pytest.mark.asyncio
async def test_merge_leaves_other_platforms_alone():
    legendary = Shortcut(app_id=3, app_name='L', exe='legendary', launch_options='launch L', tags=['Legendary'])
    collection = ShortcutCollection([manual_shortcut(), legendary])

    await merge_platform_shortcuts(collection, FakePlatform('Epic', []))

    assert [s.app_id for s in collection] == [1, 3]
    assert collection.get(3).to_vdf() == legendary.to_vdf()


@pytest.mark.asyncio
async def test_merge_failure_keeps_existing_platform_shortcuts():
    existing = Shortcut(app_id=2, app_name='Old', exe='old', tags=['Epic'])
    collection = ShortcutCollection([existing])
    platform = FakePlatform('Epic', error=PlatformUnavailable('Epic', 'Manifests folder not found'))

    result = await merge_platform_shortcuts(collection, platform)

    assert result['success'] is False
    assert 'Manifests folder not found' in result['error']
    assert list(collection) == [existing]


@pytest.mark.asyncio
async def test_disabled_platform_is_not_called():
    collection = ShortcutCollection([Shortcut(app_id=2, app_name='Old', exe='old', tags=['Epic'])])
    platform = FakePlatform('Epic', [], is_enabled=False)

    result = await merge_platform_shortcuts(collection, platform)

    assert result['skipped'] is True
    assert platform.calls == 0
    assert len(collection) == 1


@pytest.mark.asyncio
async def test_merge_skips_entry_colliding_with_manual_shortcut():
    entry = PlatformEntry(title='Manual Game', exe='"/usr/bin/manual"')
    manual = entry.to_shortcut('Epic')
    manual.tags = []
    collection = ShortcutCollection([manual])

    result = await merge_platform_shortcuts(collection, FakePlatform('Epic', [entry]))

    assert result['added'] == 0
    assert len(collection) == 1
    assert collection.get(manual.app_id).tags == []
