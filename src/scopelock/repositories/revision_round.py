"""Repository for RevisionRound entity."""

from uuid import UUID

from sqlalchemy import func, update
from sqlmodel import select

from src.scopelock.models import RevisionRound, RevisionRoundStatus
from src.scopelock.models.base import utc_now
from src.scopelock.repositories.base import BaseRepository


class RevisionRoundRepository(BaseRepository[RevisionRound]):
    """Repository for RevisionRound entity."""

    model = RevisionRound

    async def get_open_round(self, project_id: UUID) -> RevisionRound | None:
        """Get the project's open round, if any."""
        result = await self.session.execute(
            select(RevisionRound).where(
                RevisionRound.project_id == project_id,
                RevisionRound.status == RevisionRoundStatus.OPEN.value,
            )
        )
        return result.scalar_one_or_none()

    async def get_max_round_number(self, project_id: UUID) -> int:
        """Highest round number for a project, 0 if none."""
        result = await self.session.execute(
            select(func.max(RevisionRound.round_number)).where(
                RevisionRound.project_id == project_id
            )
        )
        return result.scalar_one_or_none() or 0

    async def list_by_project(self, project_id: UUID) -> list[RevisionRound]:
        """All rounds of a project, oldest first."""
        result = await self.session.execute(
            select(RevisionRound)
            .where(RevisionRound.project_id == project_id)
            .order_by(RevisionRound.round_number)
        )
        return list(result.scalars().all())

    def mark_submitted(self, revision_round: RevisionRound) -> RevisionRound:
        """Move a round to its terminal status."""
        revision_round.status = RevisionRoundStatus.SUBMITTED.value
        revision_round.submitted_at = utc_now()
        self.session.add(revision_round)
        return revision_round

    async def close_open_rounds(self, project_id: UUID) -> list[int]:
        """Submit every open round of a project without touching revision counts.

        Returns the round numbers that were closed.
        """
        open_rounds = await self.session.execute(
            select(RevisionRound.round_number).where(
                RevisionRound.project_id == project_id,
                RevisionRound.status == RevisionRoundStatus.OPEN.value,
            )
        )
        closed = list(open_rounds.scalars().all())
        if closed:
            stmt = (
                update(RevisionRound)
                .where(RevisionRound.project_id == project_id)  # type: ignore[arg-type]
                .where(RevisionRound.status == RevisionRoundStatus.OPEN.value)  # type: ignore[arg-type]
                .values(status=RevisionRoundStatus.SUBMITTED.value, submitted_at=utc_now())
                .execution_options(synchronize_session="fetch")
            )
            await self.session.execute(stmt)
        return closed
