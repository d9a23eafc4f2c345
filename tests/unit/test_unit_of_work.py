"""Unit tests for the error taxonomy and the unit-of-work envelope."""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError

from src.scopelock.core.db import atomic
from src.scopelock.core.exceptions import (
    ReviewRuleViolation,
    RuleViolationKind,
    StoreUnavailableError,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def mock_session() -> AsyncMock:
    """Create mock database session."""
    session = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    return session


class TestReviewRuleViolation:
    """Tests for ReviewRuleViolation constructors."""

    @pytest.mark.parametrize(
        ("factory", "kind"),
        [
            (ReviewRuleViolation.not_found, RuleViolationKind.NOT_FOUND),
            (ReviewRuleViolation.invalid_state, RuleViolationKind.INVALID_STATE),
            (ReviewRuleViolation.quota_exceeded, RuleViolationKind.QUOTA_EXCEEDED),
            (ReviewRuleViolation.unauthorized, RuleViolationKind.UNAUTHORIZED),
            (ReviewRuleViolation.validation_error, RuleViolationKind.VALIDATION_ERROR),
        ],
    )
    def test_constructors_set_kind(self, factory, kind):
        error = factory("Something is wrong")

        assert error.kind == kind
        assert error.reason == "Something is wrong"
        assert str(error) == "Something is wrong"

    def test_repr(self):
        error = ReviewRuleViolation.quota_exceeded("Included Revisions Complete")

        assert repr(error) == (
            "ReviewRuleViolation(kind='quota_exceeded', reason='Included Revisions Complete')"
        )

    def test_kind_compares_to_string(self):
        assert RuleViolationKind.INVALID_STATE == "invalid_state"


class TestAtomic:
    """Tests for the atomic unit of work."""

    async def test_commits_on_success(self, mock_session):
        async with atomic(mock_session, "test_op") as session:
            assert session is mock_session

        mock_session.commit.assert_awaited_once()
        mock_session.rollback.assert_not_called()

    async def test_rule_violation_rolls_back(self, mock_session):
        with pytest.raises(ReviewRuleViolation) as exc_info:
            async with atomic(mock_session, "test_op"):
                raise ReviewRuleViolation.invalid_state("Project is approved and locked")

        assert exc_info.value.kind == RuleViolationKind.INVALID_STATE
        mock_session.rollback.assert_awaited_once()
        mock_session.commit.assert_not_called()

    @pytest.mark.parametrize(
        "error",
        [
            OperationalError("SELECT 1", {}, Exception("connection refused")),
            InterfaceError("SELECT 1", {}, Exception("connection closed")),
        ],
    )
    async def test_store_fault_becomes_unavailable(self, mock_session, error):
        with pytest.raises(StoreUnavailableError) as exc_info:
            async with atomic(mock_session, "test_op"):
                raise error

        assert exc_info.value.__cause__ is error
        mock_session.rollback.assert_awaited_once()

    async def test_commit_failure_rolls_back(self, mock_session):
        """A fault raised by the commit itself is still mapped."""
        mock_session.commit.side_effect = OperationalError(
            "COMMIT", {}, Exception("server closed the connection")
        )

        with pytest.raises(StoreUnavailableError):
            async with atomic(mock_session, "test_op"):
                pass

        mock_session.rollback.assert_awaited_once()

    async def test_other_errors_propagate_unchanged(self, mock_session):
        error = IntegrityError("INSERT", {}, Exception("duplicate key"))

        with pytest.raises(IntegrityError):
            async with atomic(mock_session, "test_op"):
                raise error

        mock_session.rollback.assert_awaited_once()
