"""Video version model - immutable once created."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from src.scopelock.models.base import utc_now


class VideoVersion(SQLModel, table=True):
    """One uploaded cut of the project's video."""

    __tablename__ = "video_versions"
    __table_args__ = (
        UniqueConstraint("project_id", "version_number", name="uq_video_versions_project_number"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    project_id: UUID = Field(foreign_key="projects.id", index=True, ondelete="CASCADE")
    version_number: int
    video_url: str = Field(max_length=2000)
    duration: float | None = Field(default=None)  # seconds
    notes: str | None = Field(default=None, max_length=5000)
    created_at: datetime = Field(default_factory=utc_now)
