"""Repository for Note entity."""

from uuid import UUID

from sqlalchemy import func
from sqlmodel import select

from src.scopelock.models import Note
from src.scopelock.repositories.base import BaseRepository


class NoteRepository(BaseRepository[Note]):
    """Repository for Note entity."""

    model = Note

    async def list_by_round(self, revision_round_id: UUID) -> list[Note]:
        """Notes of a round ordered by their position in the video."""
        result = await self.session.execute(
            select(Note)
            .where(Note.revision_round_id == revision_round_id)
            .order_by(Note.timestamp, Note.created_at)
        )
        return list(result.scalars().all())

    async def count_by_round(self, revision_round_id: UUID) -> int:
        result = await self.session.execute(
            select(func.count())
            .select_from(Note)
            .where(Note.revision_round_id == revision_round_id)
        )
        return result.scalar_one()
