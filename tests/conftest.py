"""Root test fixtures shared across all test types.

Database-specific fixtures are in tests/integration/conftest.py.
"""

import os

# Set APP_ENV to testing before any app imports
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.pop("RESEND_API_KEY", None)

# ruff: noqa: E402 - Imports must be after env var setup
from unittest.mock import MagicMock

import pytest

from src.scopelock.core.config import Settings, get_settings
from src.scopelock.core.notifications import EmailNotifier

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Settings for tests, independent of any .env file."""
    return Settings(
        _env_file=None,
        app_env="testing",
        database_url="sqlite+aiosqlite:///:memory:",
        app_url="https://review.example.com",
        email_from="ScopeLock <noreply@example.com>",
    )


@pytest.fixture
def mock_notifier() -> MagicMock:
    """Notifier double whose sends all succeed."""
    notifier = MagicMock(spec=EmailNotifier)
    for name in (
        "send_version_uploaded",
        "send_revision_submitted",
        "send_final_revision_used",
        "send_approval_request",
        "send_project_approved",
    ):
        getattr(notifier, name).return_value = True
    return notifier
