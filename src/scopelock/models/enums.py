"""Shared enums for models."""

from enum import Enum


class ProjectState(str, Enum):
    """Project lifecycle state. APPROVED is terminal."""

    ACTIVE = "active"
    APPROVED = "approved"


class RevisionRoundStatus(str, Enum):
    """Revision round lifecycle status. SUBMITTED is terminal."""

    OPEN = "open"
    SUBMITTED = "submitted"


class ScopeStatus(str, Enum):
    """Scope classification of a client note."""

    IN_SCOPE = "in_scope"
    ADDITIONAL_REQUEST = "additional_request"


class RequestType(str, Enum):
    """Category tags a note can be filed under.

    A project's contract scope is the subset of these it allows.
    """

    PACING = "pacing"
    MUSIC = "music"
    COLOR = "color"
    TEXT = "text"
    CUT = "cut"
    AUDIO = "audio"
    EFFECTS = "effects"
    OTHER = "other"


class ActivityEventType(str, Enum):
    """Activity log event types, one per state transition."""

    PROJECT_CREATED = "project_created"
    VIDEO_UPLOADED = "video_uploaded"
    REVISION_ROUND_OPENED = "revision_round_opened"
    REVISION_ROUND_SUBMITTED = "revision_round_submitted"
    NOTE_ADDED = "note_added"
    SCOPE_OVERRIDDEN = "scope_overridden"
    REVIEW_LINK_GENERATED = "review_link_generated"
    REVIEW_LINK_REVOKED = "review_link_revoked"
    PROJECT_APPROVED = "project_approved"
