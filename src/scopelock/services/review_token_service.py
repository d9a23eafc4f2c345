"""Review link service - magic link tokens and the client review view."""

import secrets
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.scopelock.core.db import atomic
from src.scopelock.core.exceptions import ReviewRuleViolation
from src.scopelock.core.logging import bind_project_context, get_logger
from src.scopelock.models import ActivityEventType, Project, ReviewToken
from src.scopelock.repositories import (
    NoteRepository,
    ProjectRepository,
    ReviewTokenRepository,
    RevisionRoundRepository,
    VideoVersionRepository,
)
from src.scopelock.schemas.project import ProjectRead
from src.scopelock.schemas.review import (
    NoteRead,
    ProjectReviewView,
    RevisionRoundRead,
    VideoVersionRead,
)
from src.scopelock.services.activity_service import ActivityService
from src.scopelock.services.scope import get_effective_scope_status

logger = get_logger(__name__)


class ReviewTokenService:
    """Issues, revokes and resolves review tokens."""

    def __init__(
        self,
        token_repo: ReviewTokenRepository,
        project_repo: ProjectRepository,
        version_repo: VideoVersionRepository,
        round_repo: RevisionRoundRepository,
        note_repo: NoteRepository,
        activity: ActivityService,
        session: AsyncSession,
        token_bytes: int = 32,
    ):
        self.token_repo = token_repo
        self.project_repo = project_repo
        self.version_repo = version_repo
        self.round_repo = round_repo
        self.note_repo = note_repo
        self.activity = activity
        self.session = session
        self.token_bytes = token_bytes

    async def _lock_owned_project(self, project_id: UUID, editor_id: UUID) -> Project:
        project = await self.project_repo.get_for_update(project_id)
        if project is None:
            raise ReviewRuleViolation.not_found("Project not found")
        if project.editor_id != editor_id:
            raise ReviewRuleViolation.unauthorized("Not authorized")
        if project.is_approved:
            raise ReviewRuleViolation.invalid_state("Project is approved and locked")
        return project

    def _new_token(self, project_id: UUID) -> ReviewToken:
        token = ReviewToken(project_id=project_id, token=secrets.token_urlsafe(self.token_bytes))
        self.token_repo.add(token)
        return token

    async def generate_review_token(self, project_id: UUID, editor_id: UUID) -> ReviewToken:
        """Create a new active review link for the project owner.

        Raises:
            ReviewRuleViolation: NOT_FOUND, UNAUTHORIZED if the editor does
                not own the project, INVALID_STATE if it is approved.
        """
        bind_project_context(project_id, editor_id)
        async with atomic(self.session, "generate_review_token"):
            await self._lock_owned_project(project_id, editor_id)
            token = self._new_token(project_id)
            self.activity.record(
                project_id,
                ActivityEventType.REVIEW_LINK_GENERATED,
                editor_id=editor_id,
            )

        logger.info("Review link generated", project_id=str(project_id), token_id=str(token.id))
        return token

    async def revoke_review_token(self, token_id: UUID, editor_id: UUID) -> ReviewToken:
        """Deactivate one review link.

        Allowed on approved projects: revoking never unlocks anything.

        Raises:
            ReviewRuleViolation: NOT_FOUND, UNAUTHORIZED if the editor does
                not own the token's project.
        """
        async with atomic(self.session, "revoke_review_token"):
            token = await self.token_repo.get_by_id(token_id)
            if token is None:
                raise ReviewRuleViolation.not_found("Token not found")
            bind_project_context(token.project_id, editor_id)

            project = await self.project_repo.get_for_update(token.project_id)
            if project is None:
                raise ReviewRuleViolation.not_found("Project not found")
            if project.editor_id != editor_id:
                raise ReviewRuleViolation.unauthorized("Not authorized")

            self.token_repo.mark_revoked(token)
            self.activity.record(
                project.id,
                ActivityEventType.REVIEW_LINK_REVOKED,
                metadata={"token_id": str(token_id)},
                editor_id=editor_id,
            )

        logger.info("Review link revoked", project_id=str(project.id), token_id=str(token_id))
        return token

    async def regenerate_review_token(self, project_id: UUID, editor_id: UUID) -> ReviewToken:
        """Revoke every active link of the project and issue exactly one new one."""
        bind_project_context(project_id, editor_id)
        async with atomic(self.session, "regenerate_review_token"):
            await self._lock_owned_project(project_id, editor_id)
            revoked = await self.token_repo.revoke_all_for_project(project_id)
            token = self._new_token(project_id)
            self.activity.record(
                project_id,
                ActivityEventType.REVIEW_LINK_GENERATED,
                metadata={"regenerated": True, "revoked_tokens": revoked},
                editor_id=editor_id,
            )

        logger.info(
            "Review link regenerated",
            project_id=str(project_id),
            revoked_tokens=revoked,
        )
        return token

    async def get_project_by_token(self, token_value: str) -> ProjectReviewView | None:
        """Resolve a review link to the client's view of the project.

        Returns None for unknown or inactive tokens. A successful lookup
        stamps ``last_used_at``; failing to stamp it never hides the view.
        """
        token = await self.token_repo.get_by_token(token_value)
        if token is None or not token.is_active:
            return None
        bind_project_context(token.project_id)

        project = await self.project_repo.get_by_id(token.project_id)
        if project is None:
            return None

        view = await self._build_view(project)

        try:
            self.token_repo.touch(token)
            await self.session.commit()
        except Exception as e:
            await self.session.rollback()
            logger.warning("Failed to stamp review link use", token_id=str(token.id), error=str(e))

        return view

    async def _build_view(self, project: Project) -> ProjectReviewView:
        latest = await self.version_repo.get_latest(project.id)
        open_round = await self.round_repo.get_open_round(project.id)

        round_view = None
        if open_round is not None:
            notes = await self.note_repo.list_by_round(open_round.id)
            round_view = RevisionRoundRead.model_validate(
                {
                    **open_round.model_dump(),
                    "notes": [
                        NoteRead.model_validate(
                            {
                                **note.model_dump(),
                                "effective_scope_status": get_effective_scope_status(note).value,
                            }
                        )
                        for note in notes
                    ],
                }
            )

        return ProjectReviewView(
            project=ProjectRead.model_validate(project),
            latest_version=VideoVersionRead.model_validate(latest) if latest else None,
            open_round=round_view,
        )
