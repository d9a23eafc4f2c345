"""Activity event model - append-only audit trail per project."""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import Column, Index
from sqlmodel import Field, SQLModel

from src.scopelock.models.base import JSONType, utc_now


class ActivityEvent(SQLModel, table=True):
    """Record of one state transition. Rows are never updated or deleted."""

    __tablename__ = "activity_events"
    __table_args__ = (
        Index("ix_activity_events_project_created", "project_id", "created_at"),
        Index("ix_activity_events_type_created", "event_type", "created_at"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    project_id: UUID = Field(foreign_key="projects.id", index=True, ondelete="CASCADE")
    editor_id: UUID | None = Field(default=None, foreign_key="editors.id", ondelete="SET NULL")
    event_type: str = Field(max_length=50)  # ActivityEventType value

    # "metadata" is reserved on declarative classes, so only the column uses it
    event_metadata: dict[str, Any] | None = Field(
        default=None,
        sa_column=Column("metadata", JSONType, nullable=True),
    )

    created_at: datetime = Field(default_factory=utc_now)
