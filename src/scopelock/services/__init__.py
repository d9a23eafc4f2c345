from src.scopelock.services.activity_service import ActivityService
from src.scopelock.services.factory import ReviewServices, build_services
from src.scopelock.services.note_service import NoteService
from src.scopelock.services.project_service import ProjectService
from src.scopelock.services.review_token_service import ReviewTokenService
from src.scopelock.services.revision_service import RevisionService
from src.scopelock.services.scope import calculate_scope_status, get_effective_scope_status

__all__ = [
    "ActivityService",
    "NoteService",
    "ProjectService",
    "ReviewServices",
    "ReviewTokenService",
    "RevisionService",
    "build_services",
    "calculate_scope_status",
    "get_effective_scope_status",
]
