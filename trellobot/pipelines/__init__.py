"""
Batch pipelines run by the scheduler.

Usage:
    from trellobot.pipelines import run_reply_classifier, run_job_checker
"""

from .common import RunAborted
from .jobs import run_job_checker
from .replies import run_reply_classifier

__all__ = [
    "RunAborted",
    "run_job_checker",
    "run_reply_classifier",
]
