"""Base repository with common data access operations."""

from datetime import datetime
from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import and_, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from src.scopelock.schemas.pagination import decode_cursor, encode_cursor

ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseRepository(Generic[ModelType]):
    """Base repository providing common database operations.

    Repositories handle data access only. Transaction control (commit)
    is done in the service layer.
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, id: UUID) -> ModelType | None:
        """Get a record by its primary key."""
        result = await self.session.execute(
            select(self.model).where(self.model.id == id)  # type: ignore[attr-defined]
        )
        return result.scalar_one_or_none()

    def add(self, entity: ModelType) -> None:
        """Add entity to session (no flush/commit)."""
        self.session.add(entity)

    async def paginate(
        self,
        query: Any,
        cursor: str | None,
        limit: int,
        cursor_field: Any,
        tiebreak_field: Any = None,
    ) -> tuple[list[ModelType], str | None, bool]:
        """Execute cursor-based pagination on a query, newest first.

        Rows are ordered by ``(cursor_field, tiebreak_field)`` descending and
        the cursor carries both values, so rows sharing a timestamp are never
        skipped or repeated across a page boundary.

        Args:
            query: The base query to paginate
            cursor: Optional cursor from previous page (base64-encoded)
            limit: Maximum number of items to return
            cursor_field: Datetime column used for ordering and the cursor
            tiebreak_field: Unique column breaking ties, the primary key by default

        Returns:
            Tuple of (items, next_cursor, has_more)
        """
        if tiebreak_field is None:
            tiebreak_field = self.model.id  # type: ignore[attr-defined]

        if cursor:
            try:
                raw_value, _, raw_key = decode_cursor(cursor).partition("|")
                cursor_value = datetime.fromisoformat(raw_value)
                cursor_key = UUID(raw_key)
                query = query.where(
                    or_(
                        cursor_field < cursor_value,
                        and_(cursor_field == cursor_value, tiebreak_field < cursor_key),
                    )
                )
            except (ValueError, TypeError):
                # Invalid cursor - ignore and start from beginning
                pass

        query = query.order_by(cursor_field.desc(), tiebreak_field.desc()).limit(limit + 1)

        result = await self.session.execute(query)
        items = list(result.scalars().all())

        has_more = len(items) > limit
        if has_more:
            items = items[:limit]

        next_cursor = None
        if has_more and items:
            value = getattr(items[-1], cursor_field.key)
            key = getattr(items[-1], tiebreak_field.key)
            if isinstance(value, datetime):
                next_cursor = encode_cursor(f"{value.isoformat()}|{key}")

        return items, next_cursor, has_more
