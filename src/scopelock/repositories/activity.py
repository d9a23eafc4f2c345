"""Repository for ActivityEvent entity.

Append and read only: the activity log has no update or delete path.
"""

from uuid import UUID

from sqlmodel import select

from src.scopelock.models import ActivityEvent
from src.scopelock.repositories.base import BaseRepository


class ActivityEventRepository(BaseRepository[ActivityEvent]):
    """Repository for ActivityEvent entity."""

    model = ActivityEvent

    async def list_by_project(
        self,
        project_id: UUID,
        cursor: str | None = None,
        limit: int = 50,
        event_type: str | None = None,
    ) -> tuple[list[ActivityEvent], str | None, bool]:
        """List a project's events with cursor pagination, newest first.

        Args:
            project_id: Project to filter by
            cursor: Pagination cursor
            limit: Maximum items to return
            event_type: Optional event type filter

        Returns:
            Tuple of (events, next_cursor, has_more)
        """
        query = select(ActivityEvent).where(ActivityEvent.project_id == project_id)
        if event_type:
            query = query.where(ActivityEvent.event_type == event_type)
        return await self.paginate(query, cursor, limit, ActivityEvent.created_at)
