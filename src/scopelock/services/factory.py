"""Service wiring - builds the core services around one session."""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from src.scopelock.core.config import Settings
from src.scopelock.core.notifications import EmailNotifier
from src.scopelock.repositories import (
    ActivityEventRepository,
    EditorRepository,
    NoteRepository,
    ProjectRepository,
    ReviewTokenRepository,
    RevisionRoundRepository,
    VideoVersionRepository,
)
from src.scopelock.services.activity_service import ActivityService
from src.scopelock.services.note_service import NoteService
from src.scopelock.services.project_service import ProjectService
from src.scopelock.services.review_token_service import ReviewTokenService
from src.scopelock.services.revision_service import RevisionService


@dataclass(frozen=True)
class ReviewServices:
    """All core services sharing one session (one transaction at a time)."""

    projects: ProjectService
    revisions: RevisionService
    notes: NoteService
    tokens: ReviewTokenService
    activity: ActivityService


def build_services(
    session: AsyncSession,
    notifier: EmailNotifier | None = None,
    settings: Settings | None = None,
) -> ReviewServices:
    """Build the services for a session.

    Args:
        session: Session owning every unit of work.
        notifier: Optional notifier invoked after committed transitions.
        settings: Optional settings for review token size and activity page size.
    """
    project_repo = ProjectRepository(session)
    round_repo = RevisionRoundRepository(session)
    version_repo = VideoVersionRepository(session)
    note_repo = NoteRepository(session)
    token_repo = ReviewTokenRepository(session)
    editor_repo = EditorRepository(session)

    activity = ActivityService(
        ActivityEventRepository(session),
        session,
        page_size=settings.activity_page_size if settings else 50,
    )

    return ReviewServices(
        projects=ProjectService(
            project_repo, round_repo, token_repo, editor_repo, activity, session, notifier
        ),
        revisions=RevisionService(
            project_repo,
            round_repo,
            version_repo,
            note_repo,
            token_repo,
            editor_repo,
            activity,
            session,
            notifier,
        ),
        notes=NoteService(note_repo, round_repo, project_repo, activity, session),
        tokens=ReviewTokenService(
            token_repo,
            project_repo,
            version_repo,
            round_repo,
            note_repo,
            activity,
            session,
            token_bytes=settings.review_token_bytes if settings else 32,
        ),
        activity=activity,
    )
