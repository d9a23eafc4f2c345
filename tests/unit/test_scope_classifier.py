"""Unit tests for scope classification."""

from uuid import uuid4

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from src.scopelock.models import Note, RequestType, ScopeStatus
from src.scopelock.services import calculate_scope_status, get_effective_scope_status

pytestmark = pytest.mark.unit


class TestCalculateScopeStatus:
    """Tests for calculate_scope_status."""

    def test_allowed_type_in_scope(self):
        assert (
            calculate_scope_status(RequestType.COLOR, False, [RequestType.COLOR])
            == ScopeStatus.IN_SCOPE
        )

    def test_disallowed_type_additional(self):
        assert (
            calculate_scope_status(RequestType.MUSIC, False, [RequestType.COLOR])
            == ScopeStatus.ADDITIONAL_REQUEST
        )

    def test_new_idea_always_additional(self):
        assert (
            calculate_scope_status(RequestType.COLOR, True, [RequestType.COLOR])
            == ScopeStatus.ADDITIONAL_REQUEST
        )

    def test_empty_allowed_list(self):
        """A project that allows nothing classifies every note as additional."""
        assert calculate_scope_status("cut", False, []) == ScopeStatus.ADDITIONAL_REQUEST

    def test_accepts_stored_strings(self):
        """Projects store allowed types as plain strings."""
        assert calculate_scope_status(RequestType.CUT, False, ["cut", "text"]) == (
            ScopeStatus.IN_SCOPE
        )
        assert calculate_scope_status("text", False, [RequestType.TEXT]) == ScopeStatus.IN_SCOPE

    def test_accepts_any_iterable(self):
        allowed = (t for t in ["audio"])
        assert calculate_scope_status("audio", False, allowed) == ScopeStatus.IN_SCOPE


@given(
    request_type=st.sampled_from(RequestType),
    new_idea=st.booleans(),
    allowed=st.sets(st.sampled_from(RequestType)),
)
@settings(max_examples=200)
def test_in_scope_iff_allowed_and_not_new_idea(
    request_type: RequestType, new_idea: bool, allowed: set[RequestType]
):
    """In scope exactly when not a new idea and the type is allowed."""
    result = calculate_scope_status(request_type, new_idea, allowed)

    assert (result == ScopeStatus.IN_SCOPE) == (not new_idea and request_type in allowed)
    assert result in (ScopeStatus.IN_SCOPE, ScopeStatus.ADDITIONAL_REQUEST)


@given(
    request_type=st.sampled_from(RequestType),
    new_idea=st.booleans(),
    allowed=st.lists(st.sampled_from([t.value for t in RequestType])),
)
def test_stored_string_tags_classify_like_enums(
    request_type: RequestType, new_idea: bool, allowed: list[str]
):
    """Projects store allowed types as strings; classification must not depend on it."""
    as_enums = [RequestType(v) for v in allowed]

    assert calculate_scope_status(request_type.value, new_idea, allowed) == (
        calculate_scope_status(request_type, new_idea, as_enums)
    )


class TestGetEffectiveScopeStatus:
    """Tests for get_effective_scope_status."""

    def test_original_status_without_override(self):
        note = Note(
            revision_round_id=uuid4(),
            timestamp=1.0,
            request_type="music",
            note_text="Swap the track",
            scope_status=ScopeStatus.ADDITIONAL_REQUEST.value,
        )

        assert get_effective_scope_status(note) == ScopeStatus.ADDITIONAL_REQUEST

    def test_override_wins(self):
        note = Note(
            revision_round_id=uuid4(),
            timestamp=1.0,
            request_type="music",
            note_text="Swap the track",
            scope_status=ScopeStatus.ADDITIONAL_REQUEST.value,
            override_to=ScopeStatus.IN_SCOPE.value,
            override_reason="Agreed",
        )

        assert get_effective_scope_status(note) == ScopeStatus.IN_SCOPE
