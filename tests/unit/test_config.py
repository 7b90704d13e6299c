"""Unit tests for settings"""

from bizbook_api.config import Settings


def test_server_bind_defaults():
    assert Settings.model_fields["host"].default == "0.0.0.0"
    assert Settings.model_fields["port"].default == 8000


def test_server_bind_from_environment(monkeypatch):
    monkeypatch.setenv("HOST", "127.0.0.1")
    monkeypatch.setenv("PORT", "9001")

    settings = Settings(_env_file=None)

    assert settings.host == "127.0.0.1"
    assert settings.port == 9001


def test_is_production_case_insensitive():
    assert Settings(_env_file=None, environment="Production").is_production
    assert not Settings(_env_file=None, environment="development").is_production
