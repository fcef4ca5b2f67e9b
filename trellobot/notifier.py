"""
Push notifications through ntfy.

One plain-text POST per notification. Sending is best effort: without a
topic nothing is sent, and delivery errors are logged and swallowed.
"""

import logging
from typing import Iterable, Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_SERVER = "https://ntfy.sh"
DEFAULT_TIMEOUT = 10


class Notifier:
    """ntfy.sh client bound to one topic."""

    def __init__(
        self,
        topic: Optional[str],
        server: str = DEFAULT_SERVER,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.topic = topic
        self.server = server.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    @classmethod
    def from_config(cls, config) -> "Notifier":
        return cls(config.ntfy_topic, server=config.ntfy_server)

    @property
    def enabled(self) -> bool:
        return bool(self.topic)

    def send(
        self,
        title: str,
        message: str,
        tags: Iterable[str] = ("robot",),
        priority: str = "default",
    ) -> bool:
        """
        Send a notification.

        Returns:
            True if the server accepted it, False if skipped or failed
        """
        if not self.enabled:
            logger.info("Notification skipped (NTFY_TOPIC not set).")
            return False

        headers = {"Title": title, "Priority": priority, "Tags": ",".join(tags)}
        try:
            response = self._session.post(
                f"{self.server}/{self.topic}",
                data=message.encode("utf-8"),
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except (requests.exceptions.RequestException, UnicodeError) as e:
            logger.error(f"Error sending notification: {e}")
            return False

        logger.info("Notification sent successfully.")
        return True


def truncate(text: str, limit: int) -> str:
    """
    Shorten text to at most limit characters, ending in '...' when cut.

    >>> truncate("Application received for Backend Engineer", 30)
    'Application received for Ba...'
    """
    if len(text) <= limit:
        return text
    return text[: max(limit - 3, 0)] + "..."
