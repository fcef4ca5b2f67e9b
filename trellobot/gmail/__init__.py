"""
Gmail Package - Gmail integration for the reply classifier

Usage:
    from trellobot.gmail import GmailClient

    client = GmailClient(credentials_file, token_file)
    for ref in client.list_unread():
        message = client.get_metadata(ref["id"])
"""

from .client import (
    GmailClient,
    has_required_scopes,
    saved_scopes,
    SCOPES,
    CREDENTIALS_FILE,
    TOKEN_FILE,
)

__all__ = [
    "GmailClient",
    "has_required_scopes",
    "saved_scopes",
    "SCOPES",
    "CREDENTIALS_FILE",
    "TOKEN_FILE",
]
