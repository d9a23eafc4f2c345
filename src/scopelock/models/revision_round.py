"""Revision round model."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import Index, UniqueConstraint, text
from sqlmodel import Field, SQLModel

from src.scopelock.models.base import utc_now
from src.scopelock.models.enums import RevisionRoundStatus


class RevisionRound(SQLModel, table=True):
    """One cycle of client feedback.

    The partial unique index keeps at most one open round per project even
    when two transactions race past the application-level check.
    """

    __tablename__ = "revision_rounds"
    __table_args__ = (
        UniqueConstraint("project_id", "round_number", name="uq_revision_rounds_project_number"),
        Index(
            "uq_revision_rounds_one_open",
            "project_id",
            unique=True,
            postgresql_where=text("status = 'open'"),
            sqlite_where=text("status = 'open'"),
        ),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    project_id: UUID = Field(foreign_key="projects.id", index=True, ondelete="CASCADE")
    round_number: int
    status: str = Field(default=RevisionRoundStatus.OPEN.value, max_length=20)
    video_version_number: int | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    submitted_at: datetime | None = Field(default=None)

    @property
    def status_enum(self) -> RevisionRoundStatus:
        """Get status as RevisionRoundStatus enum."""
        return RevisionRoundStatus(self.status)

    @property
    def is_open(self) -> bool:
        return self.status == RevisionRoundStatus.OPEN.value
