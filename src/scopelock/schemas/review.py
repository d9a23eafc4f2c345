"""Read projections served to a client holding a review link."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from src.scopelock.schemas.project import ProjectRead


class VideoVersionRead(BaseModel):
    id: UUID
    version_number: int
    video_url: str
    duration: float | None
    notes: str | None
    created_at: datetime

    model_config = {"from_attributes": True}


class NoteRead(BaseModel):
    """A note as the client sees it, with its effective scope status."""

    id: UUID
    timestamp: float
    request_type: str
    note_text: str
    client_marked_new_idea: bool
    scope_status: str
    effective_scope_status: str
    override_reason: str | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class RevisionRoundRead(BaseModel):
    id: UUID
    round_number: int
    status: str
    video_version_number: int | None
    created_at: datetime
    submitted_at: datetime | None
    notes: list[NoteRead] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class ProjectReviewView(BaseModel):
    """Project state assembled for an unauthenticated review link."""

    project: ProjectRead
    latest_version: VideoVersionRead | None = None
    open_round: RevisionRoundRead | None = None
