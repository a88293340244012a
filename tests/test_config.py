"""Tests for settings and database URL handling."""

import pytest

from subscore.config import Settings, async_database_url


@pytest.mark.parametrize(
    "url, expected",
    [
        ("postgresql://u:p@db:5432/subs", "postgresql+asyncpg://u:p@db:5432/subs"),
        ("postgresql+asyncpg://u:p@db/subs", "postgresql+asyncpg://u:p@db/subs"),
        ("sqlite:///./data/subscore.db", "sqlite+aiosqlite:///./data/subscore.db"),
        ("sqlite+aiosqlite:///./data/subscore.db", "sqlite+aiosqlite:///./data/subscore.db"),
    ],
)
def test_async_database_url_pins_async_driver(url, expected):
    assert async_database_url(url) == expected


def test_settings_rewrite_plain_postgres_scheme():
    settings = Settings(database_url="postgresql://u:p@db/subs")
    assert settings.database_url == "postgresql+asyncpg://u:p@db/subs"


def test_default_cors_origin_is_local_frontend():
    assert Settings().cors_origins == ["http://localhost:3000"]
