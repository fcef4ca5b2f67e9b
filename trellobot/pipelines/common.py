"""
Helpers shared by the reply classifier and job status checker runs.
"""

import logging

from trellobot.notifier import Notifier

logger = logging.getLogger(__name__)


class RunAborted(Exception):
    """Raised when a run cannot continue; the error was already notified."""


def abort(notifier: Notifier, title: str, message: str) -> RunAborted:
    """Log and notify a run-level failure, returning the exception to raise."""
    logger.error(message)
    notifier.send(title, message)
    return RunAborted(message)
