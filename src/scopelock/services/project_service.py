"""Project lifecycle service: creation, approval and the approval lock."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.scopelock.core.db import atomic
from src.scopelock.core.exceptions import ReviewRuleViolation
from src.scopelock.core.logging import bind_project_context, get_logger
from src.scopelock.core.notifications import EmailNotifier, dispatch
from src.scopelock.models import ActivityEventType, Project, ProjectState
from src.scopelock.models.base import utc_now
from src.scopelock.repositories import (
    EditorRepository,
    ProjectRepository,
    ReviewTokenRepository,
    RevisionRoundRepository,
)
from src.scopelock.schemas.project import ProjectCreate
from src.scopelock.services.activity_service import ActivityService

logger = get_logger(__name__)


async def lock_unapproved_project(project_repo: ProjectRepository, project_id: UUID) -> Project:
    """Load and row-lock a project that may still be written to.

    Raises:
        ReviewRuleViolation: NOT_FOUND if missing, INVALID_STATE if approved.
    """
    project = await project_repo.get_for_update(project_id)
    if project is None:
        raise ReviewRuleViolation.not_found("Project not found")
    if project.is_approved:
        raise ReviewRuleViolation.invalid_state("Project is approved and locked")
    return project


class ProjectService:
    """Project state machine: active -> approved."""

    def __init__(
        self,
        project_repo: ProjectRepository,
        round_repo: RevisionRoundRepository,
        token_repo: ReviewTokenRepository,
        editor_repo: EditorRepository,
        activity: ActivityService,
        session: AsyncSession,
        notifier: EmailNotifier | None = None,
    ):
        self.project_repo = project_repo
        self.round_repo = round_repo
        self.token_repo = token_repo
        self.editor_repo = editor_repo
        self.activity = activity
        self.session = session
        self.notifier = notifier

    async def get_project(self, project_id: UUID) -> Project | None:
        """Get project by ID."""
        return await self.project_repo.get_by_id(project_id)

    async def assert_project_not_approved(self, project_id: UUID) -> Project:
        """Guard shared by every mutating operation.

        Inside a unit of work this also takes the project row lock.
        """
        return await lock_unapproved_project(self.project_repo, project_id)

    async def create_project(self, editor_id: UUID, data: ProjectCreate) -> Project:
        """Create an active project owned by the editor."""
        async with atomic(self.session, "create_project"):
            editor = await self.editor_repo.get_by_id(editor_id)
            if editor is None:
                raise ReviewRuleViolation.not_found("Editor not found")

            project = Project(
                editor_id=editor_id,
                title=data.title,
                client_name=data.client_name,
                client_email=str(data.client_email),
                allowed_request_types=[t.value for t in data.allowed_request_types],
                revision_cap=data.revision_cap,
            )
            self.project_repo.add(project)
            await self.session.flush()
            bind_project_context(project.id, editor_id)

            self.activity.record(
                project.id,
                ActivityEventType.PROJECT_CREATED,
                metadata={"revision_cap": project.revision_cap},
                editor_id=editor_id,
            )

        logger.info("Project created", project_id=str(project.id), editor_id=str(editor_id))
        return project

    async def approve_project(self, project_id: UUID) -> Project:
        """Approve the project, locking it and revoking every review link.

        Raises:
            ReviewRuleViolation: INVALID_STATE while a round is open or if
                already approved, NOT_FOUND if the project is missing.
        """
        bind_project_context(project_id)
        async with atomic(self.session, "approve_project"):
            project = await self.project_repo.get_for_update(project_id)

            if await self.round_repo.get_open_round(project_id) is not None:
                raise ReviewRuleViolation.invalid_state(
                    "Cannot approve project with open revision round"
                )
            if project is None:
                raise ReviewRuleViolation.not_found("Project not found")
            if project.is_approved:
                raise ReviewRuleViolation.invalid_state("Project already approved")

            now = utc_now()
            project.state = ProjectState.APPROVED.value
            project.approved_at = now
            project.updated_at = now
            self.project_repo.add(project)

            revoked = await self.token_repo.revoke_all_for_project(project_id)

            self.activity.record(
                project_id,
                ActivityEventType.PROJECT_APPROVED,
                metadata={"revoked_tokens": revoked},
            )
            editor = await self.editor_repo.get_by_id(project.editor_id)

        logger.info("Project approved", project_id=str(project_id), revoked_tokens=revoked)

        if self.notifier is not None and editor is not None:
            dispatch(
                "project_approved",
                self.notifier.send_project_approved,
                editor_email=editor.email,
                client_name=project.client_name,
                project_id=project.id,
            )
        return project
