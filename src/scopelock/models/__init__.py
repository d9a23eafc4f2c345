"""Model exports.

Import from here: `from src.scopelock.models import Project, RevisionRound`
"""

from src.scopelock.models.activity import ActivityEvent
from src.scopelock.models.editor import Editor
from src.scopelock.models.enums import (
    ActivityEventType,
    ProjectState,
    RequestType,
    RevisionRoundStatus,
    ScopeStatus,
)
from src.scopelock.models.note import Note, ScopeOverride
from src.scopelock.models.project import Project
from src.scopelock.models.review_token import ReviewToken
from src.scopelock.models.revision_round import RevisionRound
from src.scopelock.models.video_version import VideoVersion

__all__ = [
    # Enums
    "ActivityEventType",
    "ProjectState",
    "RequestType",
    "RevisionRoundStatus",
    "ScopeStatus",
    # Value objects
    "ScopeOverride",
    # Models
    "ActivityEvent",
    "Editor",
    "Note",
    "Project",
    "ReviewToken",
    "RevisionRound",
    "VideoVersion",
]
