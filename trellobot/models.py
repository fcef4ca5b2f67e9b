"""
Data models shared by the reply classifier and the job status checker.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional


class ReplyLabel(str, Enum):
    """Intent of a reply to a job application."""

    INITIAL_INTERVIEW = "INITIAL_INTERVIEW"
    CODING_CHALLENGE = "CODING_CHALLENGE"
    TECHNICAL_INTERVIEW = "TECHNICAL_INTERVIEW"
    HR_INTERVIEW = "HR_INTERVIEW"
    REJECTION = "REJECTION"
    OFFER = "OFFER"
    OTHER_REPLY = "OTHER_REPLY"


class JobStatus(str, Enum):
    """Whether a job posting is still published."""

    ACTIVE = "ACTIVE"
    DELETED = "DELETED"


@dataclass
class TrelloCard:
    """A Trello card as returned by the lists/{id}/cards endpoint."""

    id: str
    name: str
    desc: str = ""
    id_list: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "TrelloCard":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            desc=data.get("desc") or "",
            id_list=data.get("idList"),
        )


@dataclass
class EmailMessage:
    """Metadata of a Gmail message fetched with format=metadata."""

    id: str
    thread_id: Optional[str]
    sender: str
    to: str
    subject: str
    snippet: str
    internal_date: Optional[int] = None

    @classmethod
    def from_api(cls, message: Dict[str, Any]) -> "EmailMessage":
        headers = {}
        for header in message.get("payload", {}).get("headers", []):
            name = header.get("name", "").lower()
            # First occurrence wins
            headers.setdefault(name, header.get("value", ""))

        internal_date = message.get("internalDate")
        return cls(
            id=message["id"],
            thread_id=message.get("threadId"),
            sender=headers.get("from", ""),
            to=headers.get("to", ""),
            subject=headers.get("subject") or "No Subject",
            snippet=message.get("snippet") or "",
            internal_date=int(internal_date) if internal_date else None,
        )

    @property
    def sender_email(self) -> str:
        """
        Clean email address from the From header.

        '"HR" <hr@acme.com>' -> 'hr@acme.com'
        """
        match = re.search(r"<([^>]+)>", self.sender)
        if match:
            return match.group(1)
        return self.sender.strip()

    @property
    def sender_domain(self) -> Optional[str]:
        email = self.sender_email
        if "@" not in email:
            return None
        return email.split("@")[1].lower() or None

    @property
    def received_at(self) -> Optional[datetime]:
        if self.internal_date is None:
            return None
        return datetime.fromtimestamp(self.internal_date / 1000, tz=timezone.utc)

    def is_addressed_to(self, address: str) -> bool:
        return address.lower() in self.to.lower()


@dataclass
class CardMatch:
    """A card matched to an email, with how it was found."""

    card: TrelloCard
    method: str


@dataclass
class Destination:
    """A Trello list a card can be moved to."""

    list_id: str
    list_name: str


@dataclass
class MovedCard:
    """Log entry for a card moved during a run."""

    name: str
    list_name: str
    subject: str


@dataclass
class ReplyRunSummary:
    """Outcome of one reply classifier run."""

    messages_seen: int = 0
    moved: List[MovedCard] = field(default_factory=list)
    failed: int = 0
    skipped: int = 0


@dataclass
class JobCheckSummary:
    """Outcome of one job status checker run."""

    cards_checked: int = 0
    deleted_jobs: List[str] = field(default_factory=list)
    failed: int = 0
