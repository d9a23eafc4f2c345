"""Project model - root aggregate of a review engagement."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, Column
from sqlmodel import Field, SQLModel

from src.scopelock.models.base import JSONType, utc_now
from src.scopelock.models.enums import ProjectState


class Project(SQLModel, table=True):
    """Project between one editor and one client.

    ``revision_used`` only ever grows, and only through round submission.
    """

    __tablename__ = "projects"
    __table_args__ = (
        CheckConstraint("revision_cap >= 0", name="ck_projects_revision_cap_non_negative"),
        CheckConstraint("revision_used >= 0", name="ck_projects_revision_used_non_negative"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    editor_id: UUID = Field(foreign_key="editors.id", index=True, ondelete="CASCADE")
    title: str = Field(max_length=200)
    client_name: str = Field(max_length=100)
    client_email: str = Field(max_length=255)
    allowed_request_types: list[str] = Field(
        default_factory=list,
        sa_column=Column(JSONType, nullable=False),
    )
    revision_cap: int = Field(default=2)
    revision_used: int = Field(default=0)
    state: str = Field(default=ProjectState.ACTIVE.value, max_length=20)
    approved_at: datetime | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def state_enum(self) -> ProjectState:
        """Get state as ProjectState enum."""
        return ProjectState(self.state)

    @property
    def is_approved(self) -> bool:
        return self.state == ProjectState.APPROVED.value

    @property
    def revision_cap_reached(self) -> bool:
        """True once no further round may be submitted."""
        return self.revision_used >= self.revision_cap

    @property
    def revisions_remaining(self) -> int:
        return max(self.revision_cap - self.revision_used, 0)
