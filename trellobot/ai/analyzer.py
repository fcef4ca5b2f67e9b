"""
AI Analyzer - safe wrappers around the configured provider

Both decisions degrade to a fixed answer instead of failing the run:
replies fall back to OTHER_REPLY and job checks fall back to ACTIVE.
"""

import logging
from typing import Optional

from trellobot.models import JobStatus, ReplyLabel

from .base import AIProvider

logger = logging.getLogger(__name__)

DEFAULT_REPLY_LABEL = ReplyLabel.OTHER_REPLY
DEFAULT_JOB_STATUS = JobStatus.ACTIVE


def classify_reply(provider: Optional[AIProvider], subject: str, snippet: str) -> ReplyLabel:
    """
    Classify a reply to a job application.

    Args:
        provider: AI provider, or None when classification is disabled
        subject: Email subject line
        snippet: Gmail snippet

    Returns:
        ReplyLabel, never None
    """
    if provider is None:
        logger.info("AI classification skipped (client not initialized).")
        return DEFAULT_REPLY_LABEL

    logger.info(f"Asking {provider.provider_name} AI ({provider.model_name}) to classify email...")
    try:
        label = provider.classify_reply(subject, snippet)
    except Exception as e:
        logger.error(f"Error calling {provider.provider_name} API: {e}")
        return DEFAULT_REPLY_LABEL

    if label is None:
        logger.warning(
            f"AI returned an unexpected classification. Defaulting to {DEFAULT_REPLY_LABEL.value}."
        )
        return DEFAULT_REPLY_LABEL

    logger.info(f"AI Classification: {label.value}")
    return label


def check_job_status(provider: Optional[AIProvider], url: str) -> JobStatus:
    """
    Decide whether the job posting at url is still live.

    Returns:
        JobStatus, ACTIVE whenever the answer is not a clear DELETED
    """
    if provider is None:
        logger.info("AI client not initialized. Assuming job is ACTIVE.")
        return DEFAULT_JOB_STATUS

    logger.info(f"Asking {provider.provider_name} AI to check URL: {url}")
    try:
        status = provider.check_job_status(url)
    except Exception as e:
        logger.error(f"Error checking job status with AI: {e}")
        return DEFAULT_JOB_STATUS

    if status is None:
        logger.warning("AI returned unexpected status. Assuming ACTIVE to be safe.")
        return DEFAULT_JOB_STATUS

    logger.info(f"AI Status: {status.value}")
    return status
