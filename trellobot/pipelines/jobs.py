"""
Job Status Checker - archive cards whose job posting was taken down.

For every card in the "Sent CV" list with a link attachment, ask a
web-browsing AI model whether the posting is still live. DELETED cards move
to the "Job Deleted From Website" list. Checks are spaced by a fixed delay.
"""

import logging
import time
from typing import Callable, Optional

from trellobot.ai import AIProvider, check_job_status
from trellobot.config import Config
from trellobot.models import JobCheckSummary, JobStatus, TrelloCard
from trellobot.notifier import Notifier
from trellobot.trello import TrelloClient, TrelloError, find_link_attachment

from .common import abort

logger = logging.getLogger(__name__)

ERROR_TITLE = "Job Checker Error"
CRASH_TITLE = "Job Checker: CRITICAL ERROR"
TAGS = ("broom", "robot")


def run_job_checker(
    config: Config,
    trello: TrelloClient,
    provider: Optional[AIProvider],
    notifier: Notifier,
    sleep: Callable[[float], None] = time.sleep,
) -> JobCheckSummary:
    """
    Check every card in the "Sent CV" list once.

    Args:
        config: Validated configuration
        trello: Trello client
        provider: Browsing-capable AI provider (None treats every job as ACTIVE)
        notifier: Notification sender
        sleep: Delay function between checks

    Returns:
        JobCheckSummary

    Raises:
        RunAborted: If the card list could not be fetched
    """
    logger.info("--- Starting Job Status Checker ---")
    summary = JobCheckSummary()

    list_id = config.sent_cv_list_id
    logger.info(f"Scanning 'Sent CV' list (ID: {list_id}) for active jobs...")
    try:
        cards = trello.get_list_cards(list_id)
    except TrelloError as e:
        raise abort(notifier, ERROR_TITLE, f"Failed to fetch Trello cards: {e}") from e

    summary.cards_checked = len(cards)
    logger.info(f"Found {len(cards)} total cards to check.")
    if not cards:
        logger.info("No cards to check. Exiting.")
        return summary

    for card in cards:
        if check_card(card, config, trello, provider, summary):
            logger.info(f"Waiting {config.check_delay_seconds:g} seconds before next check...")
            sleep(config.check_delay_seconds)

    logger.info("--- Summary ---")
    logger.info(f"Checked {summary.cards_checked} cards.")
    logger.info(f"Moved {len(summary.deleted_jobs)} deleted job cards.")
    logger.info("--- Job Status Check Complete ---")

    notifier.send(*build_notification(summary), tags=TAGS)
    return summary


def check_card(
    card: TrelloCard,
    config: Config,
    trello: TrelloClient,
    provider: Optional[AIProvider],
    summary: JobCheckSummary,
) -> bool:
    """
    Check one card and move it if its job is gone.

    Returns:
        True if the AI was consulted (the caller then waits), False if the
        card was skipped
    """
    logger.info(f"Checking card: {card.name!r} (ID: {card.id})")

    try:
        attachments = trello.get_card_attachments(card.id)
    except TrelloError as e:
        logger.error(f"Error fetching attachments: {e}")
        return False

    job_url = find_link_attachment(attachments)
    if job_url is None:
        logger.info("No link attachment found. Skipping.")
        return False

    if check_job_status(provider, job_url) is JobStatus.ACTIVE:
        logger.info("Job is still ACTIVE. Leaving card in place.")
        return True

    logger.info("Job is DELETED. Moving card to 'Job Deleted' list...")
    try:
        trello.move_card(card.id, config.job_deleted_list_id)
    except TrelloError as e:
        logger.error(f"Error moving card: {e}")
        summary.failed += 1
        return True

    logger.info("Card moved successfully.")
    summary.deleted_jobs.append(card.name)
    return True


def build_notification(summary: JobCheckSummary):
    """
    Title and body of the run notification.

    Returns:
        tuple: (title, message)
    """
    moved = len(summary.deleted_jobs)
    if not moved:
        return (
            "Trello Job Checker",
            f"Checked {summary.cards_checked} cards. All jobs are still active.",
        )

    names = "\n- ".join(summary.deleted_jobs)
    return (
        f"Trello Job Checker: {moved} Job(s) Deleted",
        f"Checked {summary.cards_checked} cards and moved {moved} deleted job(s):\n- {names}",
    )
