"""
Configuration unit tests
"""

from role_admin.config import Settings, get_settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("DATABASE_TYPE", raising=False)
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("GET_BY_ID_RAISE_NOT_FOUND", raising=False)
    settings = Settings(_env_file=None)
    assert settings.DATABASE_TYPE == "sqlite"
    assert settings.DATABASE_URL.startswith("sqlite+aiosqlite://")
    assert settings.GET_BY_ID_RAISE_NOT_FOUND is False


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("DATABASE_TYPE", "postgresql")
    monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://u:p@db/roles")
    monkeypatch.setenv("GET_BY_ID_RAISE_NOT_FOUND", "true")
    settings = Settings(_env_file=None)
    assert settings.DATABASE_TYPE == "postgresql"
    assert settings.DATABASE_URL == "postgresql+asyncpg://u:p@db/roles"
    assert settings.GET_BY_ID_RAISE_NOT_FOUND is True


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
