"""Repository for VideoVersion entity."""

from uuid import UUID

from sqlalchemy import func
from sqlmodel import select

from src.scopelock.models import VideoVersion
from src.scopelock.repositories.base import BaseRepository


class VideoVersionRepository(BaseRepository[VideoVersion]):
    """Repository for VideoVersion entity."""

    model = VideoVersion

    async def get_max_version_number(self, project_id: UUID) -> int:
        """Highest version number for a project, 0 if none."""
        result = await self.session.execute(
            select(func.max(VideoVersion.version_number)).where(
                VideoVersion.project_id == project_id
            )
        )
        return result.scalar_one_or_none() or 0

    async def get_latest(self, project_id: UUID) -> VideoVersion | None:
        """Get the most recent version of a project."""
        result = await self.session.execute(
            select(VideoVersion)
            .where(VideoVersion.project_id == project_id)
            .order_by(VideoVersion.version_number.desc())  # type: ignore[attr-defined]
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def list_by_project(self, project_id: UUID) -> list[VideoVersion]:
        """All versions of a project, oldest first."""
        result = await self.session.execute(
            select(VideoVersion)
            .where(VideoVersion.project_id == project_id)
            .order_by(VideoVersion.version_number)
        )
        return list(result.scalars().all())
