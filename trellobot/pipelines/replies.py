"""
Reply Classifier - move Trello cards when companies answer an application.

Steps:
1. Connect to Gmail and fetch the cards waiting in the "Sent CV" list
2. List unread inbox messages
3. For each message addressed to me, match a card by thread id or sender
   domain, classify the reply and move the card to the routed list
4. Send a summary notification
"""

import logging
from typing import List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from trellobot.ai import AIProvider, classify_reply
from trellobot.config import Config
from trellobot.gmail import GmailClient
from trellobot.matching import find_matching_card
from trellobot.models import EmailMessage, MovedCard, ReplyRunSummary, TrelloCard
from trellobot.notifier import Notifier, truncate
from trellobot.routing import resolve_destination
from trellobot.trello import TrelloClient, TrelloError

from .common import abort

logger = logging.getLogger(__name__)

ERROR_TITLE = "Trello Bot Error"
CRASH_TITLE = "Trello Bot: CRITICAL ERROR"
TAGS = ("robot",)


def run_reply_classifier(
    config: Config,
    gmail: GmailClient,
    trello: TrelloClient,
    provider: Optional[AIProvider],
    notifier: Notifier,
) -> ReplyRunSummary:
    """
    Process unread replies once.

    Args:
        config: Validated configuration
        gmail: Gmail client (authenticates on first use)
        trello: Trello client
        provider: AI provider, or None to route every match as OTHER_REPLY
        notifier: Notification sender

    Returns:
        ReplyRunSummary

    Raises:
        RunAborted: If Gmail or Trello could not be read at all
    """
    summary = ReplyRunSummary()

    logger.info("Connecting to Gmail...")
    try:
        gmail.get_service()
    except Exception as e:
        raise abort(notifier, ERROR_TITLE, f"Failed to connect to Gmail: {e}") from e
    logger.info("Gmail connection successful.")

    logger.info(f"Fetching Trello cards from 'Sent CV' list ({config.sent_cv_list_id})...")
    try:
        cards = trello.get_list_cards(config.sent_cv_list_id)
    except TrelloError as e:
        raise abort(notifier, ERROR_TITLE, f"Failed to fetch Trello cards: {e}") from e
    logger.info(f"Found {len(cards)} cards in 'Sent CV'.")

    logger.info("Fetching UNREAD emails from Gmail...")
    try:
        refs = gmail.list_unread(query=config.gmail_query, max_results=config.gmail_max_results)
    except Exception as e:
        raise abort(notifier, ERROR_TITLE, f"Failed to fetch Gmail list: {e}") from e

    summary.messages_seen = len(refs)
    if not refs:
        logger.info("No unread emails found in inbox.")
        return summary
    logger.info(f"Found {len(refs)} unread emails. Analyzing...")

    for ref in refs:
        try:
            message = EmailMessage.from_api(gmail.get_metadata(ref["id"]))
        except Exception as e:
            logger.error(f"Error fetching details for email ID {ref.get('id')}: {e}")
            summary.skipped += 1
            continue

        process_message(message, cards, config, gmail, trello, provider, summary)

    log_summary(summary)
    notifier.send(*build_notification(summary, config.subject_max_length), tags=TAGS)
    return summary


def process_message(
    message: EmailMessage,
    cards: List[TrelloCard],
    config: Config,
    gmail: GmailClient,
    trello: TrelloClient,
    provider: Optional[AIProvider],
    summary: ReplyRunSummary,
) -> None:
    """
    Match, classify and route a single email.

    A moved card is removed from cards in place.
    """
    if not message.is_addressed_to(config.my_email):
        logger.info(f"Skipping email {message.subject!r} (Not directly addressed to you).")
        summary.skipped += 1
        return

    logger.info(f"Analyzing email: {message.subject!r}")
    logger.info(f"  From: {message.sender_email}")
    logger.info(f"  Date: {format_date(message, config.timezone)}")

    match = find_matching_card(cards, message.thread_id, message.sender_domain)
    if match is None:
        logger.info("No matching Trello card found (by Thread ID or Domain) in the 'Sent CV' list.")
        return

    card = match.card
    logger.info(f"Found matching Trello card by {match.method}: {card.name!r}")

    label = classify_reply(provider, message.subject, message.snippet)
    destination = resolve_destination(label, config)
    if destination is None:
        logger.info(f"No action defined for classification {label.value}. Email remains unread.")
        return

    logger.info(f"Attempting to move card to {destination.list_name!r} list...")
    try:
        trello.move_card(card.id, destination.list_id)
    except TrelloError as e:
        logger.error(f"Error moving card {card.id}: {e}")
        summary.failed += 1
        return

    logger.info("Successfully moved card.")
    summary.moved.append(
        MovedCard(name=card.name, list_name=destination.list_name, subject=message.subject)
    )
    gmail.mark_as_read(message.id)
    cards[:] = [c for c in cards if c.id != card.id]


def format_date(message: EmailMessage, tz_name: str) -> str:
    received = message.received_at
    if received is None:
        return "unknown"
    try:
        received = received.astimezone(ZoneInfo(tz_name))
    except (ZoneInfoNotFoundError, ValueError, TypeError):
        logger.debug(f"Unknown timezone {tz_name!r}, showing UTC")
    return received.strftime("%d/%m/%Y, %H:%M")


def log_summary(summary: ReplyRunSummary) -> None:
    logger.info("--- Summary ---")
    logger.info(f"Processed {summary.messages_seen} unread emails.")
    logger.info(f"Moved {len(summary.moved)} Trello cards.")
    if summary.failed:
        logger.info(f"Failed to move {summary.failed} cards.")
    logger.info("--- End of run ---")


def build_notification(summary: ReplyRunSummary, subject_max_length: int = 30):
    """
    Title and body of the run notification.

    Returns:
        tuple: (title, message)
    """
    if not summary.moved:
        title = "Trello Bot: All Clear"
        message = f"Processed {summary.messages_seen} unread emails. No new actions taken."
    else:
        title = f"Trello Bot: {len(summary.moved)} Card(s) Moved"
        lines = [
            f'- {entry.name} -> {entry.list_name} (from: "{truncate(entry.subject, subject_max_length)}")'
            for entry in summary.moved
        ]
        message = f"Moved {len(summary.moved)} card(s):\n" + "\n".join(lines)

    if summary.failed:
        message += f"\nFailed to move {summary.failed} card(s)."
    return title, message
