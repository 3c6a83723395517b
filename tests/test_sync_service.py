"""
Tests for SyncService, the per-user shortcut + artwork pipeline.
"""
from unittest.mock import AsyncMock, Mock, patch

import pytest

from gridsync.errors import PlatformUnavailable, StoreIOError
from gridsync.services.sync_service import SyncService
from gridsync.shortcuts.model import Shortcut, ShortcutCollection
from gridsync.shortcuts.store import ShortcutStore
from gridsync.settings import EpicGamesSettings
from gridsync.stores import EpicPlatform
from gridsync.stores.base import Platform, PlatformEntry
from gridsync.utils.steam_user import SteamUser


class StaticPlatform(Platform):
    def __init__(self, name, entries=None, error=None):
        self._name = name
        self.entries = entries or []
        self.error = error

    @property
    def name(self):
        return self._name

    def enabled(self):
        return True

    async def get_shortcuts(self):
        if self.error:
            raise self.error
        return self.entries


@pytest.fixture
def user(tmp_path):
    return SteamUser(user_id='1234', userdata_path=str(tmp_path / 'userdata' / '1234'))


@pytest.mark.asyncio
async def test_sync_user_merges_and_writes(user):
    epic = StaticPlatform('Epic', [PlatformEntry(title='Game A', exe='"/games/a.exe"')])
    service = SyncService([epic])

    result = await service.sync_user(user)

    assert result['success'] is True
    assert result['shortcuts'] == 1
    assert result['platforms']['Epic']['added'] == 1
    saved = ShortcutStore(user).load()
    assert [s.app_name for s in saved] == ['Game A']


@pytest.mark.asyncio
async def test_failing_platform_does_not_affect_others(user):
    existing = ShortcutCollection([
        Shortcut(app_id=10, app_name='Old Epic', exe='"old.exe"', tags=['Epic']),
    ])
    ShortcutStore(user).save(existing)
    service = SyncService([
        StaticPlatform('Epic', error=PlatformUnavailable('Epic', 'launcher not installed')),
        StaticPlatform('Legendary', [PlatformEntry(title='L', exe='"legendary"', launch_options='launch L')]),
    ])

    result = await service.sync_user(user)

    assert result['success'] is True
    assert result['platforms']['Epic']['success'] is False
    saved = ShortcutStore(user).load()
    assert sorted(s.app_name for s in saved) == ['L', 'Old Epic']


@pytest.mark.asyncio
async def test_unchanged_collection_is_not_rewritten(user):
    entries = [PlatformEntry(title='Game A', exe='"/games/a.exe"')]
    service = SyncService([StaticPlatform('Epic', entries)])
    await service.sync_user(user)

    with patch.object(ShortcutStore, 'save') as store_save:
        result = await service.sync_user(user)

    assert result['success'] is True
    store_save.assert_not_called()


@pytest.mark.asyncio
async def test_artwork_runs_with_merged_shortcuts(user):
    artwork = Mock(sync_artwork=AsyncMock(return_value={'downloaded': 3}))
    service = SyncService([StaticPlatform('Epic', [PlatformEntry(title='A', exe='a')])], artwork)

    result = await service.sync_user(user)

    assert result['artwork'] == {'downloaded': 3}
    shortcuts, grid_path = artwork.sync_artwork.call_args.args
    assert [s.app_name for s in shortcuts] == ['A']
    assert grid_path == user.grid_path


@pytest.mark.asyncio
async def test_store_error_ends_only_that_user(tmp_path):
    broken = SteamUser(user_id='1', userdata_path=str(tmp_path / '1'))
    (tmp_path / '1' / 'config' / 'shortcuts.vdf').mkdir(parents=True)
    healthy = SteamUser(user_id='2', userdata_path=str(tmp_path / '2'))
    service = SyncService([StaticPlatform('Epic', [PlatformEntry(title='A', exe='a')])])

    results = await service.sync_users([broken, healthy])

    assert results[0]['success'] is False
    assert results[0]['user_id'] == '1'
    assert results[0]['error']
    assert results[1]['success'] is True


@pytest.mark.asyncio
async def test_artwork_store_error_is_reported(user):
    artwork = Mock(sync_artwork=AsyncMock(side_effect=StoreIOError('grid folder not writable')))
    service = SyncService([], artwork)

    result = await service.sync_user(user)

    assert result['success'] is False
    assert 'grid folder not writable' in result['error']


@pytest.mark.asyncio
async def test_malformed_epic_manifest_does_not_stop_other_users(tmp_path):
    manifests = tmp_path / 'manifests'
    manifests.mkdir()
    (manifests / 'a.item').write_text('null')
    users = [
        SteamUser(user_id='1', userdata_path=str(tmp_path / '1')),
        SteamUser(user_id='2', userdata_path=str(tmp_path / '2')),
    ]
    service = SyncService([
        EpicPlatform(EpicGamesSettings(location=str(manifests))),
        StaticPlatform('Legendary', [PlatformEntry(title='L', exe='"legendary"', launch_options='launch L')]),
    ])

    results = await service.sync_users(users)

    assert [r['success'] for r in results] == [True, True]
    assert all(r['platforms']['Epic']['success'] is False for r in results)
    for user in users:
        assert [s.app_name for s in ShortcutStore(user).load()] == ['L']
