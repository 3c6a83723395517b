import json

from gridsync.settings import Settings, load_settings


def test_missing_file_uses_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv("STEAMGRIDDB_API_KEY", raising=False)
    settings = load_settings(str(tmp_path / "settings.json"))
    assert settings == Settings()
    assert settings.steamgriddb.enabled is True
    assert settings.steamgriddb.api_key is None


def test_partial_file_keeps_other_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv("STEAMGRIDDB_API_KEY", raising=False)
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({
        "steamgriddb": {"api_key": "abc"},
        "legendary": {"enabled": False, "executable": "/opt/legendary"},
    }))

    settings = load_settings(str(path))

    assert settings.steamgriddb.api_key == "abc"
    assert settings.steamgriddb.enabled is True
    assert settings.legendary.enabled is False
    assert settings.legendary.executable == "/opt/legendary"
    assert settings.epic_games.enabled is True


def test_env_overrides_api_key(tmp_path, monkeypatch):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"steamgriddb": {"api_key": "from-file"}}))
    monkeypatch.setenv("STEAMGRIDDB_API_KEY", "from-env")
    assert load_settings(str(path)).steamgriddb.api_key == "from-env"


def test_invalid_file_falls_back_to_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv("STEAMGRIDDB_API_KEY", raising=False)
    path = tmp_path / "settings.json"
    path.write_text("{broken")
    assert load_settings(str(path)) == Settings()
