"""Editor and project factories for test data generation."""

import secrets

from polyfactory import Use

from src.scopelock.models import Editor, Project, ProjectState, RequestType, ReviewToken
from tests.factories.base import BaseFactory, generate_uuid, utc_now


class EditorFactory(BaseFactory):
    """Factory for generating Editor test data."""

    __model__ = Editor

    id = Use(generate_uuid)
    email = Use(lambda: f"editor_{generate_uuid().hex[-8:]}@example.com")
    full_name = "Test Editor"
    created_at = Use(utc_now)


class ProjectFactory(BaseFactory):
    """Factory for generating Project test data."""

    __model__ = Project

    id = Use(generate_uuid)
    editor_id = None  # Required FK - must be set explicitly
    title = Use(lambda: f"Brand Film {generate_uuid().hex[-6:]}")
    client_name = "Acme Client"
    client_email = Use(lambda: f"client_{generate_uuid().hex[-8:]}@example.com")
    allowed_request_types = Use(lambda: [RequestType.COLOR.value, RequestType.CUT.value])
    revision_cap = 2
    revision_used = 0
    state = ProjectState.ACTIVE.value
    approved_at = None
    created_at = Use(utc_now)
    updated_at = Use(utc_now)

    @classmethod
    def approved(cls, **kwargs):
        """Create an already approved project."""
        return cls.build(state=ProjectState.APPROVED.value, approved_at=utc_now(), **kwargs)


class ReviewTokenFactory(BaseFactory):
    """Factory for generating ReviewToken test data."""

    __model__ = ReviewToken

    id = Use(generate_uuid)
    project_id = None  # Required FK - must be set explicitly
    token = Use(lambda: secrets.token_urlsafe(32))
    is_active = True
    created_at = Use(utc_now)
    revoked_at = None
    last_used_at = None

    @classmethod
    def revoked(cls, **kwargs):
        """Create a revoked token."""
        return cls.build(is_active=False, revoked_at=utc_now(), **kwargs)
