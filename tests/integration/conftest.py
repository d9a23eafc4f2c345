"""Integration test fixtures for database operations.

Tests run against a throwaway SQLite file (via aiosqlite) with the full
schema created from model metadata. Row locks are a no-op on SQLite; the
partial unique index on open rounds and every foreign key (including the
ON DELETE actions) are enforced.
Uses polyfactory for type-safe test data generation.
"""

from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel

import src.scopelock.models  # noqa: F401 - register tables on the metadata
from src.scopelock.core.config import Settings
from src.scopelock.models import Editor, Project
from src.scopelock.services import ReviewServices, build_services
from tests.helpers import create_editor_with_project


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'scopelock.db'}"


@pytest.fixture(scope="function")
async def engine(database_url: str) -> AsyncGenerator[AsyncEngine]:
    """Create test database engine with every table in place."""
    test_engine = create_async_engine(database_url, poolclass=NullPool)

    @event.listens_for(test_engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield test_engine
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Provide an async session for database operations.

    Services commit their own units of work. Fixtures that insert data
    directly must call `await session.commit()` themselves.
    """
    async with AsyncSession(engine, expire_on_commit=False, autoflush=False) as session:
        yield session


@pytest.fixture
def services(
    db_session: AsyncSession, mock_notifier: MagicMock, settings: Settings
) -> ReviewServices:
    """Core services bound to the test session with a recording notifier."""
    return build_services(db_session, mock_notifier, settings)


@pytest.fixture
async def editor_and_project(db_session: AsyncSession) -> tuple[Editor, Project]:
    """An editor with one active project, revision cap 2, color and cut allowed."""
    return await create_editor_with_project(db_session)


@pytest.fixture
def editor(editor_and_project: tuple[Editor, Project]) -> Editor:
    return editor_and_project[0]


@pytest.fixture
def project(editor_and_project: tuple[Editor, Project]) -> Project:
    return editor_and_project[1]
