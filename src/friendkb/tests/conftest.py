"""
Core pytest configuration for the entire test suite.

This module provides only the database setup and logging setup shared by ALL
tests. Repository fixtures live in tests/test_fixtures/repository_fixtures.py and
are imported at the bottom so every test module can use them.
"""

from __future__ import annotations

import os
import logging
from pathlib import Path
from urllib.parse import urlparse
from typing import AsyncGenerator

NOISY_LOGGERS = (
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "asyncio",
    "aiosqlite",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)


import pytest
from pytest import FixtureRequest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from friendkb.database.base import Base
from friendkb import models  # noqa: F401 – import to register models with Base.metadata
from friendkb.config import get_settings
from friendkb.core.logging.builder import setup_logging

settings = get_settings()
logger = logging.getLogger(__name__)


@pytest.fixture(scope="session", autouse=True)
def configure_logging(request: FixtureRequest):
    """
    Install the package logging configuration for the whole session, then put
    pytest's capture handler back on root (dictConfig removes it) so caplog works.
    """
    setup_logging(settings)

    caplog_plugin = request.config.pluginmanager.getplugin("logging-plugin")
    handler = getattr(caplog_plugin, "caplog_handler", None)
    if handler is not None:
        logging.getLogger().addHandler(handler)

    yield


def safe_log_db_url(db_url: str) -> str:
    """Scheme, host, port and database only: credentials never reach the log."""
    parsed = urlparse(db_url)
    return f"{parsed.scheme}://{parsed.hostname or ''}:{parsed.port or ''}/{parsed.path.lstrip('/')}"


def get_test_database_url() -> str | None:
    """
    Determine the test database URL.

    1. `TEST_DATABASE_URL` environment variable (CI override)
    2. settings.DATABASE_URL when `TESTING=true` and `TEST_POSTGRES_DB` is set
    3. None: each test gets its own SQLite file (see `async_engine`)
    """
    if test_url := os.getenv("TEST_DATABASE_URL"):
        return test_url

    if settings.TESTING and settings.TEST_POSTGRES_DB:
        return settings.DATABASE_URL

    return None


TEST_DATABASE_URL = get_test_database_url()
if TEST_DATABASE_URL:
    logger.info("Using test DB: %s", safe_log_db_url(TEST_DATABASE_URL))


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores FOREIGN KEY clauses (and ON DELETE CASCADE) unless asked per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture()
async def async_engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """
    A fresh schema per test.

    Repositories commit in their own sessions, so tests cannot be isolated by
    rolling back an outer transaction; the tables are created and dropped instead.
    """
    url = TEST_DATABASE_URL or f"sqlite+aiosqlite:///{tmp_path / 'test_database.db'}"
    engine = create_async_engine(url, echo=False, pool_pre_ping=True)

    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


from .test_fixtures.repository_fixtures import (  # noqa: E402,F401
    repo_ctx,
    user_repository,
    friend_repository,
    group_repository,
    friend_attribute_repository,
    friend_relationship_repository,
    user_friend_relationship_repository,
    sample_user_data,
    create_user,
    created_user,
    create_friend,
    create_group,
    set_created_at,
)
