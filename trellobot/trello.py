"""
Trello Client - thin wrapper over the Trello REST API

Only the three calls the bot needs: list the cards of a list, list the
attachments of a card, and move a card to another list.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from .models import TrelloCard

logger = logging.getLogger(__name__)

TRELLO_BASE_URL = "https://api.trello.com/1"
DEFAULT_TIMEOUT = 15


class TrelloError(Exception):
    """Raised when a Trello API call fails."""


class TrelloClient:
    """Trello REST client authenticated with an API key/token pair."""

    def __init__(
        self,
        api_key: str,
        token: str,
        session: Optional[requests.Session] = None,
        base_url: str = TRELLO_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.api_key = api_key
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    def _request(self, method: str, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        query = {"key": self.api_key, "token": self.token}
        if params:
            query.update(params)

        try:
            response = self._session.request(
                method, f"{self.base_url}{path}", params=query, timeout=self.timeout
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            # Keep key/token out of the message
            raise TrelloError(f"{method.upper()} {path} failed: {_describe(e)}") from e

        return response.json()

    def get_list_cards(self, list_id: str) -> List[TrelloCard]:
        """Get all open cards in a list, in board order."""
        cards = self._request("get", f"/lists/{list_id}/cards")
        return [TrelloCard.from_api(card) for card in cards]

    def get_card_attachments(self, card_id: str) -> List[Dict[str, Any]]:
        return self._request("get", f"/cards/{card_id}/attachments")

    def move_card(self, card_id: str, list_id: str) -> Dict[str, Any]:
        """Reassign a card to another list."""
        return self._request("put", f"/cards/{card_id}", params={"idList": list_id})


def _describe(error: requests.exceptions.RequestException) -> str:
    response = getattr(error, "response", None)
    if response is not None:
        return f"HTTP {response.status_code} {response.reason}"
    return type(error).__name__


def find_link_attachment(attachments: List[Dict[str, Any]]) -> Optional[str]:
    """
    URL of the first link attachment on a card.

    Uploaded files are ignored; only attachments explicitly marked
    isUpload=false with a URL count.
    """
    for attachment in attachments:
        if attachment.get("isUpload") is False and attachment.get("url"):
            return attachment["url"]
    return None
