"""
AI Package - AI decisions for the Trello job tracker bot

Supports Groq (default) and Claude providers.

Usage:
    from trellobot.ai import get_provider, classify_reply, check_job_status

    provider = get_provider(config)
    label = classify_reply(provider, subject, snippet)
    status = check_job_status(provider, url)
"""

from .base import AIProvider, REPLY_CATEGORIES, parse_job_status, parse_reply_label
from .factory import get_optional_provider, get_provider, get_provider_info
from .analyzer import (
    DEFAULT_JOB_STATUS,
    DEFAULT_REPLY_LABEL,
    check_job_status,
    classify_reply,
)

__all__ = [
    # Base
    "AIProvider",
    "REPLY_CATEGORIES",
    "parse_job_status",
    "parse_reply_label",
    # Factory
    "get_provider",
    "get_optional_provider",
    "get_provider_info",
    # Analyzer functions
    "classify_reply",
    "check_job_status",
    "DEFAULT_REPLY_LABEL",
    "DEFAULT_JOB_STATUS",
]
