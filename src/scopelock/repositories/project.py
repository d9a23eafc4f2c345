"""Repository for Project entity."""

from uuid import UUID

from sqlmodel import select

from src.scopelock.models import Project
from src.scopelock.repositories.base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    """Repository for Project entity."""

    model = Project

    async def get_for_update(self, project_id: UUID) -> Project | None:
        """Get a project and lock its row until the transaction ends.

        Every mutating operation takes this lock first, so transitions on
        one project are serialized.
        """
        result = await self.session.execute(
            select(Project)
            .where(Project.id == project_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()
