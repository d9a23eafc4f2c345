"""Domain error taxonomy.

Business-rule rejections are raised as ``ReviewRuleViolation`` carrying
exactly one ``RuleViolationKind``. They are never retried. Store outages
surface as ``StoreUnavailableError`` after the unit of work has rolled back.
"""

from enum import Enum


class RuleViolationKind(str, Enum):
    """Kinds of business-rule rejection."""

    NOT_FOUND = "not_found"
    INVALID_STATE = "invalid_state"
    QUOTA_EXCEEDED = "quota_exceeded"
    UNAUTHORIZED = "unauthorized"
    VALIDATION_ERROR = "validation_error"


class ReviewRuleViolation(Exception):
    """A domain rule rejected the operation."""

    def __init__(self, kind: RuleViolationKind, reason: str):
        super().__init__(reason)
        self.kind = kind
        self.reason = reason

    def __repr__(self) -> str:
        return f"ReviewRuleViolation(kind={self.kind.value!r}, reason={self.reason!r})"

    @classmethod
    def not_found(cls, reason: str) -> "ReviewRuleViolation":
        return cls(RuleViolationKind.NOT_FOUND, reason)

    @classmethod
    def invalid_state(cls, reason: str) -> "ReviewRuleViolation":
        return cls(RuleViolationKind.INVALID_STATE, reason)

    @classmethod
    def quota_exceeded(cls, reason: str) -> "ReviewRuleViolation":
        return cls(RuleViolationKind.QUOTA_EXCEEDED, reason)

    @classmethod
    def unauthorized(cls, reason: str) -> "ReviewRuleViolation":
        return cls(RuleViolationKind.UNAUTHORIZED, reason)

    @classmethod
    def validation_error(cls, reason: str) -> "ReviewRuleViolation":
        return cls(RuleViolationKind.VALIDATION_ERROR, reason)


class StoreUnavailableError(Exception):
    """The persistent store could not complete the transaction.

    The transaction has been rolled back in full; callers may retry.
    """
