"""Review token model - magic link credential for a client."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.scopelock.models.base import utc_now


class ReviewToken(SQLModel, table=True):
    """Opaque credential granting one client access to one project.

    Stored verbatim since later notification emails must carry the link.
    """

    __tablename__ = "review_tokens"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    project_id: UUID = Field(foreign_key="projects.id", index=True, ondelete="CASCADE")
    token: str = Field(max_length=255, unique=True, index=True)
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utc_now)
    revoked_at: datetime | None = Field(default=None)
    last_used_at: datetime | None = Field(default=None)
