"""Database utilities - engine, session, unit of work, migrations."""

from src.scopelock.core.db.engine import dispose_engine, get_engine
from src.scopelock.core.db.migrations import run_migrations_sync
from src.scopelock.core.db.session import atomic, get_session, get_session_factory

__all__ = [
    # Engine
    "dispose_engine",
    "get_engine",
    # Session
    "atomic",
    "get_session",
    "get_session_factory",
    # Migrations
    "run_migrations_sync",
]
