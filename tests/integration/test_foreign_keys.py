"""Integration tests for foreign key enforcement and delete behaviour."""

from uuid import uuid4

import pytest
from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError

from src.scopelock.models import (
    ActivityEvent,
    ActivityEventType,
    Editor,
    Note,
    Project,
    ReviewToken,
    RevisionRound,
    VideoVersion,
)
from tests.factories import ProjectFactory
from tests.helpers import create_editor_with_project

pytestmark = pytest.mark.integration


async def count_rows(session, model, **filters) -> int:
    query = select(func.count()).select_from(model)
    for name, value in filters.items():
        query = query.where(getattr(model, name) == value)
    result = await session.execute(query)
    return result.scalar_one()


@pytest.fixture
async def populated_project(services, project, editor):
    """A project with a version, a submitted round, a note, a link and activity."""
    await services.revisions.upload_video_version(project.id, "https://cdn.example.com/v1.mp4")
    revision_round = await services.revisions.open_revision_round(project.id)
    await services.notes.add_note(revision_round.id, 3.0, "color", "Warmer skin tones")
    await services.revisions.submit_revision_round(revision_round.id)
    await services.tokens.generate_review_token(project.id, editor.id)
    return project


class TestForeignKeys:
    """Foreign keys are enforced on insert."""

    async def test_project_for_unknown_editor_rejected(self, db_session):
        db_session.add(ProjectFactory.build(editor_id=uuid4()))

        with pytest.raises(IntegrityError):
            await db_session.commit()

        await db_session.rollback()
        assert await count_rows(db_session, Project) == 0


class TestDeleteCascades:
    """Deleting a parent removes or detaches its children."""

    async def test_project_delete_removes_children(self, db_session, populated_project):
        project_id = populated_project.id
        round_ids = (
            await db_session.execute(
                select(RevisionRound.id).where(RevisionRound.project_id == project_id)
            )
        ).scalars().all()
        assert len(round_ids) == 1
        assert await count_rows(db_session, Note, revision_round_id=round_ids[0]) == 1

        await db_session.execute(delete(Project).where(Project.id == project_id))
        await db_session.commit()

        assert await count_rows(db_session, RevisionRound, project_id=project_id) == 0
        assert await count_rows(db_session, Note, revision_round_id=round_ids[0]) == 0
        assert await count_rows(db_session, VideoVersion, project_id=project_id) == 0
        assert await count_rows(db_session, ReviewToken, project_id=project_id) == 0
        assert await count_rows(db_session, ActivityEvent, project_id=project_id) == 0

    async def test_editor_delete_removes_projects(self, db_session, editor, populated_project):
        project_id = populated_project.id
        other_editor, other_project = await create_editor_with_project(db_session)

        await db_session.execute(delete(Editor).where(Editor.id == editor.id))
        await db_session.commit()

        assert await count_rows(db_session, Project, id=project_id) == 0
        assert await count_rows(db_session, RevisionRound, project_id=project_id) == 0
        assert await count_rows(db_session, Project, id=other_project.id) == 1
        assert await count_rows(db_session, Editor, id=other_editor.id) == 1

    async def test_editor_delete_keeps_foreign_history(self, db_session, project):
        """Events and overrides by a removed editor survive with the actor cleared."""
        other_editor, _ = await create_editor_with_project(db_session)
        revision_round = RevisionRound(project_id=project.id, round_number=1)
        db_session.add(revision_round)
        await db_session.flush()
        note = Note(
            revision_round_id=revision_round.id,
            timestamp=1.0,
            request_type="music",
            note_text="Different track",
            scope_status="additional_request",
            override_to="in_scope",
            override_reason="Swapped as a favour",
            override_editor_id=other_editor.id,
        )
        event = ActivityEvent(
            project_id=project.id,
            event_type=ActivityEventType.SCOPE_OVERRIDDEN.value,
            editor_id=other_editor.id,
        )
        db_session.add_all([note, event])
        await db_session.commit()
        note_id, event_id = note.id, event.id
        db_session.expunge_all()

        await db_session.execute(delete(Editor).where(Editor.id == other_editor.id))
        await db_session.commit()

        stored_note = await db_session.get(Note, note_id)
        stored_event = await db_session.get(ActivityEvent, event_id)
        assert stored_note is not None
        assert stored_note.override_editor_id is None
        assert stored_note.override_to == "in_scope"
        assert stored_event is not None
        assert stored_event.editor_id is None
