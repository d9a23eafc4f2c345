"""Note model and its scope override value object."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.scopelock.models.base import utc_now
from src.scopelock.models.enums import ScopeStatus


@dataclass(frozen=True)
class ScopeOverride:
    """Editor reclassification layered over a note's original status."""

    override_to: ScopeStatus
    reason: str
    editor_id: UUID
    overridden_at: datetime


class Note(SQLModel, table=True):
    """Client note within a revision round.

    ``scope_status`` is computed once at creation and never rewritten.
    Reclassification only fills the override columns.
    """

    __tablename__ = "notes"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    revision_round_id: UUID = Field(
        foreign_key="revision_rounds.id", index=True, ondelete="CASCADE"
    )
    timestamp: float  # position in the video, client supplied
    request_type: str = Field(max_length=50)
    note_text: str = Field(max_length=5000)
    client_marked_new_idea: bool = Field(default=False)
    scope_status: str = Field(max_length=30)

    override_to: str | None = Field(default=None, max_length=30)
    override_reason: str | None = Field(default=None, max_length=1000)
    override_editor_id: UUID | None = Field(
        default=None, foreign_key="editors.id", ondelete="SET NULL"
    )
    override_at: datetime | None = Field(default=None)

    created_at: datetime = Field(default_factory=utc_now)

    @property
    def override(self) -> ScopeOverride | None:
        """The override value object, or None if the note was never overridden."""
        if self.override_to is None:
            return None
        return ScopeOverride(
            override_to=ScopeStatus(self.override_to),
            reason=self.override_reason or "",
            editor_id=self.override_editor_id,  # type: ignore[arg-type]
            overridden_at=self.override_at,  # type: ignore[arg-type]
        )

    def apply_override(self, override: ScopeOverride) -> None:
        """Record an override. The original classification is left untouched."""
        self.override_to = override.override_to.value
        self.override_reason = override.reason
        self.override_editor_id = override.editor_id
        self.override_at = override.overridden_at
