"""Fire-and-forget dispatch of notifications after a committed transition."""

from collections.abc import Callable
from typing import Any

from src.scopelock.core.logging import get_logger

logger = get_logger(__name__)


def dispatch(notification: str, send: Callable[..., bool], **kwargs: Any) -> bool:
    """Invoke a notifier method, never letting its failure reach the caller.

    Args:
        notification: Name used in log events.
        send: Bound notifier method.
        **kwargs: Arguments for the notifier method.

    Returns:
        True if the notifier reported success.
    """
    try:
        sent = send(**kwargs)
    except Exception as e:
        logger.warning("Notification failed", notification=notification, error=str(e))
        return False

    if not sent:
        logger.warning("Notification not delivered", notification=notification)
    return bool(sent)
