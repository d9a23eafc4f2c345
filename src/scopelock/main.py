"""Process bootstrap: logging, notifier and per-use service sessions."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncEngine

from src.scopelock.core.config import Settings, get_settings
from src.scopelock.core.db import dispose_engine, get_session
from src.scopelock.core.logging import clear_project_context, get_logger, setup_logging
from src.scopelock.core.notifications import EmailNotifier
from src.scopelock.services import ReviewServices, build_services

logger = get_logger(__name__)


class Runtime:
    """Process-wide collaborators assembled once at startup."""

    def __init__(self, settings: Settings, engine: AsyncEngine | None = None):
        self.settings = settings
        self.engine = engine
        self.notifier = EmailNotifier(settings)

    @asynccontextmanager
    async def services(self) -> AsyncGenerator[ReviewServices]:
        """Open a session and yield the services bound to it.

        Log context bound by the services is dropped when the block exits.
        """
        clear_project_context()
        try:
            async with get_session(self.engine) as session:
                yield build_services(session, self.notifier, self.settings)
        finally:
            clear_project_context()


@asynccontextmanager
async def lifespan(engine: AsyncEngine | None = None) -> AsyncGenerator[Runtime]:
    """Runtime lifespan - startup and shutdown."""
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info(f"Starting {settings.app_name}", app_env=settings.app_env)

    try:
        yield Runtime(settings, engine)
    finally:
        if engine is None:
            await dispose_engine()
        logger.info(f"Stopped {settings.app_name}")
