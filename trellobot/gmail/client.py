"""
Gmail Client - Gmail API authentication and message access

This module handles the OAuth2 token file, the installed-app authorization
flow, and the three Gmail calls the reply classifier needs.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build

logger = logging.getLogger(__name__)

# Reading metadata plus clearing the UNREAD label
SCOPES = [
    "https://www.googleapis.com/auth/gmail.readonly",
    "https://www.googleapis.com/auth/gmail.modify",
]

CREDENTIALS_FILE = Path("credentials.json")
TOKEN_FILE = Path("token.json")

METADATA_HEADERS = ["From", "Subject", "To"]


def saved_scopes(token_info: Dict[str, Any]) -> List[str]:
    """
    Scopes recorded in a saved token.

    google-auth writes a "scopes" list; older tokens carry a
    space-separated "scope" string.
    """
    scopes = token_info.get("scopes")
    if isinstance(scopes, list):
        return scopes
    scope = token_info.get("scope") or scopes
    if isinstance(scope, str):
        return scope.split()
    return []


def has_required_scopes(token_info: Dict[str, Any], required: List[str] = SCOPES) -> bool:
    granted = set(saved_scopes(token_info))
    return all(scope in granted for scope in required)


class GmailClient:
    """
    Gmail API client with OAuth2 authentication.

    Handles:
    - Reusing token.json when it grants every required scope
    - Refreshing expired credentials
    - Re-running the OAuth flow when the token is missing or under-scoped
    - Listing, reading and marking messages
    """

    def __init__(self, credentials_file: Optional[Path] = None, token_file: Optional[Path] = None):
        """
        Initialize Gmail client.

        Args:
            credentials_file: Path to OAuth2 credentials.json
            token_file: Path to store/load token.json
        """
        self.credentials_file = credentials_file or CREDENTIALS_FILE
        self.token_file = token_file or TOKEN_FILE
        self._service = None
        self._creds = None

    def get_service(self):
        """
        Get authenticated Gmail API service.

        Returns:
            googleapiclient.discovery.Resource: Authenticated Gmail API service

        Raises:
            FileNotFoundError: If credentials.json is missing and a new
                authorization is needed
        """
        if self._service is not None:
            return self._service

        self._authenticate()
        self._service = build("gmail", "v1", credentials=self._creds)
        return self._service

    def _load_saved_credentials(self) -> Optional[Credentials]:
        """Load token.json if it exists and covers every required scope."""
        if not self.token_file.exists():
            return None

        try:
            token_info = json.loads(self.token_file.read_text())
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read {self.token_file}: {e}")
            return None

        if not has_required_scopes(token_info):
            logger.info("Saved Google token is missing required scopes. Re-authorizing...")
            return None

        logger.info("Re-using saved Google token.")
        return Credentials.from_authorized_user_info(token_info, SCOPES)

    def _authenticate(self):
        """Handle OAuth2 authentication flow."""
        creds = self._load_saved_credentials()

        if creds and creds.valid:
            self._creds = creds
            return

        # Tokens saved without an access token are neither valid nor expired
        if creds and creds.refresh_token:
            try:
                creds.refresh(Request())
            except Exception as e:
                logger.error(f"Failed to refresh Gmail credentials: {e}")
                if self.token_file.exists():
                    self.token_file.unlink()
                raise
        else:
            if self.token_file.exists():
                self.token_file.unlink()
            if not self.credentials_file.exists():
                raise FileNotFoundError(
                    f"Missing {self.credentials_file}. Download from Google Cloud Console."
                )
            flow = InstalledAppFlow.from_client_secrets_file(str(self.credentials_file), SCOPES)
            creds = flow.run_local_server(port=0)

        with open(self.token_file, "w") as f:
            f.write(creds.to_json())
        logger.info(f"Token saved to {self.token_file}")

        self._creds = creds

    def list_unread(self, query: str = "is:inbox is:unread", max_results: int = 20) -> List[dict]:
        """
        List unread inbox messages.

        Returns:
            List of {"id", "threadId"} dictionaries, newest first
        """
        service = self.get_service()
        results = (
            service.users().messages().list(userId="me", q=query, maxResults=max_results).execute()
        )
        return results.get("messages", [])

    def get_metadata(self, msg_id: str) -> dict:
        """Fetch headers, snippet and internal date of a message."""
        service = self.get_service()
        return (
            service.users()
            .messages()
            .get(userId="me", id=msg_id, format="metadata", metadataHeaders=METADATA_HEADERS)
            .execute()
        )

    def mark_as_read(self, msg_id: str) -> bool:
        """
        Remove the UNREAD label from a message.

        Failures are logged and reported through the return value.
        """
        service = self.get_service()
        try:
            service.users().messages().modify(
                userId="me", id=msg_id, body={"removeLabelIds": ["UNREAD"]}
            ).execute()
        except Exception as e:
            logger.error(f"Failed to mark email {msg_id} as read: {e}")
            return False

        logger.info(f"Marked email {msg_id} as read.")
        return True
