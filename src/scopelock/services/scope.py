"""Scope classification of client notes.

A note is in scope only when the client did not flag it as a new idea and
its request type is one the project's contract allows. Everything else is an
additional request.
"""

from collections.abc import Iterable
from enum import Enum

from src.scopelock.models import Note, ScopeStatus
from src.scopelock.models.enums import RequestType


def _tag(value: RequestType | str) -> str:
    return value.value if isinstance(value, Enum) else value


def calculate_scope_status(
    request_type: RequestType | str,
    client_marked_new_idea: bool,
    allowed_request_types: Iterable[RequestType | str],
) -> ScopeStatus:
    """Classify a note against the project's allowed request types."""
    allowed = {_tag(t) for t in allowed_request_types}
    if not client_marked_new_idea and _tag(request_type) in allowed:
        return ScopeStatus.IN_SCOPE
    return ScopeStatus.ADDITIONAL_REQUEST


def get_effective_scope_status(note: Note) -> ScopeStatus:
    """Override value if the editor reclassified the note, else the original."""
    override = note.override
    if override is not None:
        return override.override_to
    return ScopeStatus(note.scope_status)
