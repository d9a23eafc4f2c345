from src.scopelock.schemas.activity import ActivityEventRead
from src.scopelock.schemas.pagination import decode_cursor, encode_cursor
from src.scopelock.schemas.project import ProjectCreate, ProjectRead
from src.scopelock.schemas.review import (
    NoteRead,
    ProjectReviewView,
    RevisionRoundRead,
    VideoVersionRead,
)

__all__ = [
    "ActivityEventRead",
    "NoteRead",
    "ProjectCreate",
    "ProjectRead",
    "ProjectReviewView",
    "RevisionRoundRead",
    "VideoVersionRead",
    "decode_cursor",
    "encode_cursor",
]
