"""Test helper functions for common data creation patterns."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.scopelock.models import Editor, Project, ReviewToken
from tests.factories import EditorFactory, ProjectFactory, ReviewTokenFactory


async def create_editor_with_project(
    session: AsyncSession,
    **project_kwargs,
) -> tuple[Editor, Project]:
    """Create an editor and one active project they own.

    Args:
        session: Database session
        **project_kwargs: Additional args passed to ProjectFactory

    Returns:
        Tuple of (editor, project), detached from the session so that a
        later rollback never expires them
    """
    editor = EditorFactory.build()
    session.add(editor)
    await session.flush()

    project = ProjectFactory.build(editor_id=editor.id, **project_kwargs)
    session.add(project)
    await session.commit()
    session.expunge_all()

    return editor, project


async def create_review_token(
    session: AsyncSession,
    project: Project,
    **token_kwargs,
) -> ReviewToken:
    """Insert a review token for a project directly, bypassing the service."""
    token = ReviewTokenFactory.build(project_id=project.id, **token_kwargs)
    session.add(token)
    await session.commit()
    session.expunge(token)
    return token
