"""
Core pytest configuration for the whole suite.

Only the database setup and logging install live here. Domain fixtures are
split into:
- tests/test_fixtures/repository_fixtures.py
- tests/test_fixtures/service_fixtures.py

and imported at the bottom of this module so every test can use them.
"""

from __future__ import annotations

import os
import sys
import asyncio
import logging
from urllib.parse import urlparse
from typing import AsyncGenerator

# Silence noisy third-party loggers before anything imports them.
NOISY_LOGGERS = (
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "asyncio",
    "aiosqlite",
    "httpx",
    "httpcore",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

import pytest
from pytest import FixtureRequest
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
    AsyncEngine,
)
from sqlalchemy.pool import StaticPool

from chatprompt.database.base import Base
from chatprompt import models  # noqa: F401 - registers every model with Base.metadata
from chatprompt.config import get_settings
from chatprompt.core.logging.builder import setup_logging

settings = get_settings()
logger = logging.getLogger(__name__)


@pytest.fixture(scope="session", autouse=True)
def configure_logging(request: FixtureRequest):
    """
    Install the application logging config once for the session and put
    pytest's capture handler back on the root logger (dictConfig removes it).
    """
    setup_logging(settings)

    caplog_plugin = request.config.pluginmanager.getplugin("logging-plugin")
    handler = getattr(caplog_plugin, "caplog_handler", None)
    if handler is not None:
        logging.getLogger().addHandler(handler)

    yield


# ------------------------------------------------------------------------------------------------
# Test database URL
# ------------------------------------------------------------------------------------------------


def safe_log_db_url(db_url: str) -> str:
    """Drop credentials from a database URL before logging it."""
    parsed = urlparse(db_url)
    return f"{parsed.scheme}://{parsed.hostname or ''}:{parsed.port or ''}/{parsed.path.lstrip('/')}"


def get_test_database_url() -> str:
    """
    1. `TEST_DATABASE_URL` (CI, e.g. a throwaway Postgres database)
    2. in-memory SQLite, no server needed
    """
    if test_url := os.getenv("TEST_DATABASE_URL"):
        return test_url
    return "sqlite+aiosqlite:///:memory:"


TEST_DATABASE_URL = get_test_database_url()
logger.info(f"Using test DB: {safe_log_db_url(TEST_DATABASE_URL)}")

# psycopg async needs the selector loop on Windows
if sys.platform == "win32":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())


# ------------------------------------------------------------------------------------------------
# DATABASE FIXTURES
# ------------------------------------------------------------------------------------------------


@pytest.fixture()
async def async_engine() -> AsyncGenerator[AsyncEngine, None]:
    """
    Fresh schema per test. Services commit between steps, so isolation comes
    from recreating the tables rather than from rolling a transaction back.

    For in-memory SQLite, StaticPool keeps a single connection so every
    session sees the same database.
    """
    if TEST_DATABASE_URL.startswith("sqlite"):
        engine = create_async_engine(
            TEST_DATABASE_URL,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_async_engine(TEST_DATABASE_URL, echo=False, pool_pre_ping=True)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture()
def session_maker(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture()
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session
        await session.rollback()


# Domain fixtures
from .test_fixtures.repository_fixtures import (  # noqa: E402,F401
    base_message_repo,
    prompt_repository,
    message_repository,
    prompt_cost_repository,
    user_prompt_repository,
    user_id,
    create_prompt,
    created_prompt,
    add_messages,
)
from .test_fixtures.service_fixtures import (  # noqa: E402,F401
    FakeProvider,
    fake_provider,
    provider_registry,
    ai_config,
    chat_service,
    prompt_service,
)
