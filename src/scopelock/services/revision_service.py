"""Revision round service: rounds, video versions and the revision cap."""

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.scopelock.core.db import atomic
from src.scopelock.core.exceptions import ReviewRuleViolation
from src.scopelock.core.logging import bind_project_context, get_logger
from src.scopelock.core.notifications import EmailNotifier, dispatch
from src.scopelock.models import ActivityEventType, Project, RevisionRound, VideoVersion
from src.scopelock.models.base import utc_now
from src.scopelock.repositories import (
    EditorRepository,
    NoteRepository,
    ProjectRepository,
    ReviewTokenRepository,
    RevisionRoundRepository,
    VideoVersionRepository,
)
from src.scopelock.services.activity_service import ActivityService
from src.scopelock.services.project_service import lock_unapproved_project

logger = get_logger(__name__)


class RevisionService:
    """Revision round state machine: open -> submitted.

    Only ``submit_revision_round`` consumes a revision. Uploading a version
    retires the open round for free.
    """

    def __init__(
        self,
        project_repo: ProjectRepository,
        round_repo: RevisionRoundRepository,
        version_repo: VideoVersionRepository,
        note_repo: NoteRepository,
        token_repo: ReviewTokenRepository,
        editor_repo: EditorRepository,
        activity: ActivityService,
        session: AsyncSession,
        notifier: EmailNotifier | None = None,
    ):
        self.project_repo = project_repo
        self.round_repo = round_repo
        self.version_repo = version_repo
        self.note_repo = note_repo
        self.token_repo = token_repo
        self.editor_repo = editor_repo
        self.activity = activity
        self.session = session
        self.notifier = notifier

    async def get_open_revision_round(self, project_id: UUID) -> RevisionRound | None:
        """Get the project's open round, if any."""
        return await self.round_repo.get_open_round(project_id)

    async def open_revision_round(
        self, project_id: UUID, video_version_number: int | None = None
    ) -> RevisionRound:
        """Open the next round for a project.

        Raises:
            ReviewRuleViolation: NOT_FOUND if the project is missing,
                INVALID_STATE if it is approved or a round is already open.
        """
        bind_project_context(project_id)
        async with atomic(self.session, "open_revision_round"):
            await lock_unapproved_project(self.project_repo, project_id)

            if await self.round_repo.get_open_round(project_id) is not None:
                raise ReviewRuleViolation.invalid_state("A revision round is already open")

            round_number = await self.round_repo.get_max_round_number(project_id) + 1
            revision_round = RevisionRound(
                project_id=project_id,
                round_number=round_number,
                video_version_number=video_version_number,
            )
            self.round_repo.add(revision_round)

            try:
                await self.session.flush()
            except IntegrityError as e:
                # Lost a race against another opener; the index kept one open round
                raise ReviewRuleViolation.invalid_state("A revision round is already open") from e

            self.activity.record(
                project_id,
                ActivityEventType.REVISION_ROUND_OPENED,
                metadata={"round_number": round_number},
            )

        logger.info(
            "Revision round opened",
            project_id=str(project_id),
            round_number=round_number,
        )
        return revision_round

    async def submit_revision_round(self, revision_round_id: UUID) -> RevisionRound:
        """Submit an open round, consuming one revision.

        Raises:
            ReviewRuleViolation: NOT_FOUND if the round is missing,
                INVALID_STATE if it is not open or the project is approved,
                QUOTA_EXCEEDED once every included revision is used.
        """
        async with atomic(self.session, "submit_revision_round"):
            revision_round = await self.round_repo.get_by_id(revision_round_id)
            if revision_round is None:
                raise ReviewRuleViolation.not_found("Revision round not found")
            bind_project_context(revision_round.project_id)

            project = await self.project_repo.get_for_update(revision_round.project_id)
            # Re-read under the project lock so a concurrent submit is seen
            await self.session.refresh(revision_round)

            if not revision_round.is_open:
                raise ReviewRuleViolation.invalid_state("Revision round already submitted")
            if project is None:
                raise ReviewRuleViolation.not_found("Project not found")
            if project.is_approved:
                raise ReviewRuleViolation.invalid_state("Project is approved and locked")
            if project.revision_cap_reached:
                raise ReviewRuleViolation.quota_exceeded("Included Revisions Complete")

            self.round_repo.mark_submitted(revision_round)
            project.revision_used += 1
            project.updated_at = utc_now()
            self.project_repo.add(project)

            self.activity.record(
                project.id,
                ActivityEventType.REVISION_ROUND_SUBMITTED,
                metadata={
                    "round_number": revision_round.round_number,
                    "revision_used": project.revision_used,
                    "revision_cap": project.revision_cap,
                },
            )

            note_count = await self.note_repo.count_by_round(revision_round.id)
            editor = await self.editor_repo.get_by_id(project.editor_id)
            token = await self.token_repo.get_latest_active(project.id)

        logger.info(
            "Revision round submitted",
            project_id=str(project.id),
            round_number=revision_round.round_number,
            revision_used=project.revision_used,
            revision_cap=project.revision_cap,
        )

        if self.notifier is not None:
            if editor is not None:
                dispatch(
                    "revision_submitted",
                    self.notifier.send_revision_submitted,
                    editor_email=editor.email,
                    client_name=project.client_name,
                    round_number=revision_round.round_number,
                    note_count=note_count,
                )
            if project.revision_used == project.revision_cap and token is not None:
                dispatch(
                    "final_revision_used",
                    self.notifier.send_final_revision_used,
                    client_email=project.client_email,
                    client_name=project.client_name,
                    token=token.token,
                    revision_cap=project.revision_cap,
                )
        return revision_round

    async def upload_video_version(
        self,
        project_id: UUID,
        video_url: str,
        duration: float | None = None,
        notes: str | None = None,
    ) -> VideoVersion:
        """Add the next video version and retire any open round.

        The open round is closed without consuming a revision.

        Raises:
            ReviewRuleViolation: NOT_FOUND if the project is missing,
                INVALID_STATE if it is approved.
        """
        bind_project_context(project_id)
        async with atomic(self.session, "upload_video_version"):
            project = await lock_unapproved_project(self.project_repo, project_id)

            version_number = await self.version_repo.get_max_version_number(project_id) + 1
            version = VideoVersion(
                project_id=project_id,
                version_number=version_number,
                video_url=video_url,
                duration=duration,
                notes=notes,
            )
            self.version_repo.add(version)

            closed_rounds = await self.round_repo.close_open_rounds(project_id)
            await self.session.flush()

            self.activity.record(
                project_id,
                ActivityEventType.VIDEO_UPLOADED,
                metadata={
                    "version_number": version_number,
                    "closed_round_number": closed_rounds[0] if closed_rounds else None,
                },
            )
            token = await self.token_repo.get_latest_active(project_id)

        logger.info(
            "Video version uploaded",
            project_id=str(project_id),
            version_number=version_number,
            closed_rounds=closed_rounds,
        )
        self._notify_version_ready(project, version, token.token if token else None)
        return version

    def _notify_version_ready(
        self, project: Project, version: VideoVersion, token: str | None
    ) -> None:
        if self.notifier is None:
            return
        if token is None:
            logger.warning(
                "No active review link - client not notified",
                project_id=str(project.id),
                version_number=version.version_number,
            )
            return

        # After the last included revision, a new cut is framed as an approval request
        if project.revision_cap_reached and project.revision_used > 0:
            dispatch(
                "approval_request",
                self.notifier.send_approval_request,
                client_email=project.client_email,
                client_name=project.client_name,
                token=token,
                version_number=version.version_number,
            )
        else:
            dispatch(
                "version_uploaded",
                self.notifier.send_version_uploaded,
                client_email=project.client_email,
                client_name=project.client_name,
                token=token,
                version_number=version.version_number,
            )
