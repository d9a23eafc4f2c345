"""Activity log service - append-only trail of project state transitions."""

from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.scopelock.core.logging import get_logger
from src.scopelock.models import ActivityEvent, ActivityEventType
from src.scopelock.repositories import ActivityEventRepository

logger = get_logger(__name__)


class ActivityService:
    """Service for recording and reading activity events.

    Unlike a fire-and-forget audit trail, events are written inside the
    caller's unit of work: the transition and its event commit or roll back
    together.
    """

    def __init__(
        self,
        activity_repo: ActivityEventRepository,
        session: AsyncSession,
        page_size: int = 50,
    ):
        self.activity_repo = activity_repo
        self.session = session
        self.page_size = page_size

    def record(
        self,
        project_id: UUID,
        event_type: ActivityEventType,
        metadata: dict[str, Any] | None = None,
        editor_id: UUID | None = None,
    ) -> ActivityEvent:
        """Append an event to the current transaction (no flush/commit)."""
        event = ActivityEvent(
            project_id=project_id,
            editor_id=editor_id,
            event_type=event_type.value,
            event_metadata=metadata,
        )
        self.activity_repo.add(event)
        logger.debug(
            "Activity event recorded",
            project_id=str(project_id),
            event_type=event.event_type,
        )
        return event

    async def list_project_activity(
        self,
        project_id: UUID,
        cursor: str | None = None,
        limit: int | None = None,
        event_type: ActivityEventType | None = None,
    ) -> tuple[list[ActivityEvent], str | None, bool]:
        """List a project's events, newest first, with cursor pagination.

        Returns:
            Tuple of (events, next_cursor, has_more). ``limit`` defaults to the
            configured page size.
        """
        return await self.activity_repo.list_by_project(
            project_id=project_id,
            cursor=cursor,
            limit=limit or self.page_size,
            event_type=event_type.value if event_type else None,
        )
