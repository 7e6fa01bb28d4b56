"""Settings — environment overrides and URL normalization."""

from library_api.config import Settings


def test_port_defaults_to_5000(monkeypatch):
    monkeypatch.delenv("PORT", raising=False)
    assert Settings(_env_file=None).port == 5000


def test_port_read_from_environment(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    assert Settings(_env_file=None).port == 8080


def test_postgres_url_gets_async_driver():
    settings = Settings(_env_file=None, database_url="postgresql://u:p@db:5432/lib")
    assert settings.database_url == "postgresql+asyncpg://u:p@db:5432/lib"


def test_other_urls_untouched():
    url = "sqlite+aiosqlite:///lib.db"
    assert Settings(_env_file=None, database_url=url).database_url == url
