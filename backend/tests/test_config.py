"""Configuration: test runs resolve to an in-memory database."""

from bookshelf.config import Settings, get_settings


def test_test_runs_use_in_memory_sqlite():
    get_settings.cache_clear()
    url = get_settings().database_url
    assert url.startswith("sqlite+aiosqlite://")
    assert url.endswith(":memory:")


def test_plain_postgres_url_gets_async_driver(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@h:5432/d")
    assert Settings().database_url == "postgresql+asyncpg://u:p@h:5432/d"
