"""
Card Matcher - find the Trello card an email reply belongs to.

Cards carry their keys in the description, e.g.:

    threadId: 18c2f9a7b3d4e5f6
    domain: acme.com

A thread id match always beats a domain match. Within each pass the first
card in list order wins.
"""

import logging
import re
from typing import Iterable, Optional

from .models import CardMatch, TrelloCard

logger = logging.getLogger(__name__)

THREAD_ID = "Thread ID"
DOMAIN = "Domain"


def domain_pattern(domain: str) -> "re.Pattern[str]":
    """
    Pattern for a `domain:` tag, bare or bracketed.

    Matches "domain: acme.com" and "domain: [acme.com]" case-insensitively.
    The domain must end there: acme.co does not match "domain: acme.com",
    while a trailing full stop is allowed.
    """
    escaped = re.escape(domain)
    return re.compile(
        rf"domain:\s*({escaped}|\[{escaped}\])(?![\w-]|\.[\w-])", re.IGNORECASE
    )


def match_by_thread_id(cards: Iterable[TrelloCard], thread_id: str) -> Optional[TrelloCard]:
    tag = f"threadId: {thread_id}"
    return next((card for card in cards if card.desc and tag in card.desc), None)


def match_by_domain(cards: Iterable[TrelloCard], domain: str) -> Optional[TrelloCard]:
    pattern = domain_pattern(domain)
    return next((card for card in cards if card.desc and pattern.search(card.desc)), None)


def find_matching_card(
    cards: Iterable[TrelloCard],
    thread_id: Optional[str],
    domain: Optional[str],
) -> Optional[CardMatch]:
    """
    Match an email to a card by thread id, then by sender domain.

    Args:
        cards: Candidate cards
        thread_id: Gmail thread id of the email
        domain: Lower-cased sender domain, or None if not derivable

    Returns:
        CardMatch, or None when no card matches
    """
    cards = list(cards)

    if thread_id:
        card = match_by_thread_id(cards, thread_id)
        if card:
            return CardMatch(card=card, method=THREAD_ID)

    if domain:
        logger.debug(f"No Thread ID match. Trying domain: {domain!r}...")
        card = match_by_domain(cards, domain)
        if card:
            return CardMatch(card=card, method=DOMAIN)

    return None
