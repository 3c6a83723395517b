"""
Tests for the gridsync command line entry point.
"""
import pytest

from gridsync.main import parse_args, run
from gridsync.settings import Settings
from gridsync.shortcuts.store import ShortcutStore
from gridsync.utils.steam_user import get_steam_users


@pytest.fixture
def steam_path(tmp_path):
    for user_id in ('0', '1111', '2222'):
        (tmp_path / 'steam' / 'userdata' / user_id).mkdir(parents=True)
    return tmp_path / 'steam'


@pytest.fixture
def manifests(tmp_path):
    folder = tmp_path / 'manifests'
    folder.mkdir()
    (folder / 'game.item').write_text(
        '{"DisplayName": "Game", "InstallLocation": "/games/Game", "LaunchExecutable": "game.exe"}'
    )
    return folder


def test_user_zero_is_skipped(steam_path):
    assert [u.user_id for u in get_steam_users(str(steam_path))] == ['1111', '2222']


@pytest.mark.asyncio
async def test_missing_api_key_stops_before_touching_users(steam_path):
    args = parse_args(['--steam-path', str(steam_path)])
    assert await run(Settings(), args) == 1
    assert not (steam_path / 'userdata' / '1111' / 'config').exists()


@pytest.mark.asyncio
async def test_missing_steam_folder_fails(tmp_path):
    args = parse_args(['--steam-path', str(tmp_path / 'nowhere'), '--no-artwork'])
    assert await run(Settings(), args) == 1


@pytest.mark.asyncio
async def test_no_artwork_run_updates_every_user(steam_path, manifests):
    settings = Settings()
    settings.epic_games.location = str(manifests)
    settings.legendary.enabled = False
    args = parse_args(['--steam-path', str(steam_path), '--no-artwork'])

    assert await run(settings, args) == 0

    for user in get_steam_users(str(steam_path)):
        names = [s.app_name for s in ShortcutStore(user).load()]
        assert names == ['Game']
