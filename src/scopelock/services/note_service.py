"""Note ledger: client notes with server-side scope enforcement."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.scopelock.core.db import atomic
from src.scopelock.core.exceptions import ReviewRuleViolation
from src.scopelock.core.logging import bind_project_context, get_logger
from src.scopelock.models import ActivityEventType, Note, ScopeOverride, ScopeStatus
from src.scopelock.models.base import utc_now
from src.scopelock.models.enums import RequestType
from src.scopelock.repositories import NoteRepository, ProjectRepository, RevisionRoundRepository
from src.scopelock.services.activity_service import ActivityService
from src.scopelock.services.scope import calculate_scope_status, get_effective_scope_status

logger = get_logger(__name__)


class NoteService:
    """Service for adding notes and overriding their scope classification."""

    def __init__(
        self,
        note_repo: NoteRepository,
        round_repo: RevisionRoundRepository,
        project_repo: ProjectRepository,
        activity: ActivityService,
        session: AsyncSession,
    ):
        self.note_repo = note_repo
        self.round_repo = round_repo
        self.project_repo = project_repo
        self.activity = activity
        self.session = session

    async def list_notes(self, revision_round_id: UUID) -> list[Note]:
        """Notes of a round ordered by timestamp ascending."""
        return await self.note_repo.list_by_round(revision_round_id)

    async def add_note(
        self,
        revision_round_id: UUID,
        timestamp: float,
        request_type: RequestType,
        note_text: str,
        client_marked_new_idea: bool = False,
    ) -> Note:
        """Add a note to an open round, classifying it server-side.

        Raises:
            ReviewRuleViolation: NOT_FOUND if the round is missing,
                INVALID_STATE if the round is submitted or the project approved,
                VALIDATION_ERROR for an unknown request type.
        """
        try:
            request_type = RequestType(request_type)
        except ValueError as e:
            raise ReviewRuleViolation.validation_error(
                f"Unknown request type: {request_type}"
            ) from e

        async with atomic(self.session, "add_note"):
            revision_round = await self.round_repo.get_by_id(revision_round_id)
            if revision_round is None:
                raise ReviewRuleViolation.not_found("Revision round not found")
            bind_project_context(revision_round.project_id)

            project = await self.project_repo.get_for_update(revision_round.project_id)
            await self.session.refresh(revision_round)

            if not revision_round.is_open:
                raise ReviewRuleViolation.invalid_state("Cannot add notes to submitted round")
            if project is None:
                raise ReviewRuleViolation.not_found("Project not found")
            if project.is_approved:
                raise ReviewRuleViolation.invalid_state("Project is approved and locked")

            scope_status = calculate_scope_status(
                request_type,
                client_marked_new_idea,
                project.allowed_request_types,
            )

            note = Note(
                revision_round_id=revision_round_id,
                timestamp=timestamp,
                request_type=request_type.value,
                note_text=note_text,
                client_marked_new_idea=client_marked_new_idea,
                scope_status=scope_status.value,
            )
            self.note_repo.add(note)
            await self.session.flush()

            self.activity.record(
                project.id,
                ActivityEventType.NOTE_ADDED,
                metadata={"note_id": str(note.id), "scope_status": scope_status.value},
            )

        logger.info(
            "Note added",
            project_id=str(project.id),
            note_id=str(note.id),
            scope_status=scope_status.value,
        )
        return note

    async def override_scope_status(
        self,
        note_id: UUID,
        editor_id: UUID,
        override_to: ScopeStatus,
        override_reason: str,
    ) -> Note:
        """Reclassify a note. Only the project owner may do it, with a justification.

        Overriding an already-overridden note is allowed; the last value wins.

        Raises:
            ReviewRuleViolation: VALIDATION_ERROR on a blank reason or unknown status,
                NOT_FOUND if the note is missing, UNAUTHORIZED if the editor
                does not own the project, INVALID_STATE if it is approved.
        """
        if not override_reason or not override_reason.strip():
            raise ReviewRuleViolation.validation_error("Override reason is required")
        try:
            target = ScopeStatus(override_to)
        except ValueError as e:
            raise ReviewRuleViolation.validation_error(
                f"Unknown scope status: {override_to}"
            ) from e

        async with atomic(self.session, "override_scope_status"):
            note = await self.note_repo.get_by_id(note_id)
            if note is None:
                raise ReviewRuleViolation.not_found("Note not found")

            revision_round = await self.round_repo.get_by_id(note.revision_round_id)
            if revision_round is None:
                raise ReviewRuleViolation.not_found("Revision round not found")
            bind_project_context(revision_round.project_id, editor_id)

            project = await self.project_repo.get_for_update(revision_round.project_id)
            if project is None:
                raise ReviewRuleViolation.not_found("Project not found")
            if project.editor_id != editor_id:
                raise ReviewRuleViolation.unauthorized("Not authorized")
            if project.is_approved:
                raise ReviewRuleViolation.invalid_state(
                    "Cannot override scope on approved project"
                )

            await self.session.refresh(note)
            previous = get_effective_scope_status(note)
            note.apply_override(
                ScopeOverride(
                    override_to=target,
                    reason=override_reason,
                    editor_id=editor_id,
                    overridden_at=utc_now(),
                )
            )
            self.note_repo.add(note)

            self.activity.record(
                project.id,
                ActivityEventType.SCOPE_OVERRIDDEN,
                metadata={
                    "note_id": str(note_id),
                    "from": previous.value,
                    "to": target.value,
                    "reason": override_reason,
                },
                editor_id=editor_id,
            )

        logger.info(
            "Scope overridden",
            project_id=str(project.id),
            note_id=str(note_id),
            from_status=previous.value,
            to_status=target.value,
        )
        return note
