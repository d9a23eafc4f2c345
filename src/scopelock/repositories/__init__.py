"""Repository layer - data access abstraction."""

from src.scopelock.repositories.activity import ActivityEventRepository
from src.scopelock.repositories.base import BaseRepository
from src.scopelock.repositories.editor import EditorRepository
from src.scopelock.repositories.note import NoteRepository
from src.scopelock.repositories.project import ProjectRepository
from src.scopelock.repositories.review_token import ReviewTokenRepository
from src.scopelock.repositories.revision_round import RevisionRoundRepository
from src.scopelock.repositories.video_version import VideoVersionRepository

__all__ = [
    "ActivityEventRepository",
    "BaseRepository",
    "EditorRepository",
    "NoteRepository",
    "ProjectRepository",
    "ReviewTokenRepository",
    "RevisionRoundRepository",
    "VideoVersionRepository",
]
