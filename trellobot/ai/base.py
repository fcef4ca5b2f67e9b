"""
Base AI Provider - Abstract base class for AI providers

Providers only implement the two raw calls (plain completion and
web-browsing completion). Prompt building and answer parsing live here so
every backend produces the same labels.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from trellobot.models import JobStatus, ReplyLabel

from .prompts import build_classify_reply_prompt, build_job_status_prompt

logger = logging.getLogger(__name__)

REPLY_CATEGORIES = [label.value for label in ReplyLabel]


class AIProvider(ABC):
    """
    Abstract base class for AI providers.

    Errors from the underlying SDK propagate out of classify_reply and
    check_job_status; callers decide on the fallback.
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the name of this AI provider (e.g. 'groq', 'claude')."""
        pass

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Return the model used for plain classification."""
        pass

    @property
    @abstractmethod
    def browse_model_name(self) -> str:
        """Return the model used for web-browsing checks."""
        pass

    @abstractmethod
    def _generate(self, system_prompt: str, user_prompt: str) -> str:
        """Run a zero-temperature chat completion and return the answer text."""
        pass

    @abstractmethod
    def _browse(self, system_prompt: str, user_prompt: str) -> str:
        """Run a completion with web browsing enabled and return the answer text."""
        pass

    def classify_reply(self, subject: str, snippet: str) -> Optional[ReplyLabel]:
        """
        Label a reply to a job application.

        Returns:
            The label, or None if the model answered with something else
        """
        system_prompt, user_prompt = build_classify_reply_prompt(subject, snippet, REPLY_CATEGORIES)
        answer = self._generate(system_prompt, user_prompt)
        return parse_reply_label(answer)

    def check_job_status(self, url: str) -> Optional[JobStatus]:
        """
        Ask the browsing model whether the posting at url is still live.

        Returns:
            The status, or None if the model answered with something else
        """
        system_prompt, user_prompt = build_job_status_prompt(url)
        answer = self._browse(system_prompt, user_prompt)
        return parse_job_status(answer)


def _normalize(answer: Optional[str]) -> str:
    return (answer or "").strip().upper()


def parse_reply_label(answer: Optional[str]) -> Optional[ReplyLabel]:
    """
    Map a raw model answer onto a ReplyLabel.

    Only an exact token (ignoring case and surrounding whitespace) counts.
    """
    token = _normalize(answer)
    try:
        return ReplyLabel(token)
    except ValueError:
        return None


def parse_job_status(answer: Optional[str]) -> Optional[JobStatus]:
    token = _normalize(answer)
    try:
        return JobStatus(token)
    except ValueError:
        return None
