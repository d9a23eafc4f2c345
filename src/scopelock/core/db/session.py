"""Database session management and the unit-of-work envelope."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from src.scopelock.core.db.engine import get_engine
from src.scopelock.core.exceptions import ReviewRuleViolation, StoreUnavailableError
from src.scopelock.core.logging import get_logger

logger = get_logger(__name__)


def get_session_factory(engine: AsyncEngine | None = None) -> async_sessionmaker[AsyncSession]:
    """Build a session factory bound to the given (or default) engine."""
    if engine is None:
        engine = get_engine()
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@asynccontextmanager
async def get_session(engine: AsyncEngine | None = None) -> AsyncGenerator[AsyncSession]:
    """Create a database session.

    Args:
        engine: Optional engine override for testing.

    Yields:
        AsyncSession. Transaction control is left to the service layer.
    """
    session_factory = get_session_factory(engine)
    async with session_factory() as session:
        yield session


@asynccontextmanager
async def atomic(session: AsyncSession, operation: str) -> AsyncGenerator[AsyncSession]:
    """Run the enclosed block as one unit of work.

    Commits on success. On any failure the whole transaction is rolled back
    before the error propagates, so no partial write is ever visible.

    Args:
        session: Session owning the transaction.
        operation: Name used in log events.

    Raises:
        ReviewRuleViolation: Re-raised unchanged after rollback.
        StoreUnavailableError: When the store reports a connection-level fault.
    """
    try:
        yield session
        await session.commit()
    except ReviewRuleViolation as e:
        await session.rollback()
        logger.info(
            "Operation rejected",
            operation=operation,
            kind=e.kind.value,
            reason=e.reason,
        )
        raise
    except (OperationalError, InterfaceError) as e:
        await session.rollback()
        logger.error("Store unavailable", operation=operation, error=str(e))
        raise StoreUnavailableError(f"{operation} failed: store unavailable") from e
    except Exception as e:
        await session.rollback()
        logger.error("Operation failed", operation=operation, error=str(e))
        raise
