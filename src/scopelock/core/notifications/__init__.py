"""Notification utilities - email."""

from src.scopelock.core.notifications.dispatch import dispatch
from src.scopelock.core.notifications.email import EmailNotifier

__all__ = ["EmailNotifier", "dispatch"]
