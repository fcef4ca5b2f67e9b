"""
Pytest configuration and shared fixtures for the Trello job tracker bot tests.
"""

import os
import sys
from typing import Any, Dict, List, Optional
from unittest.mock import Mock

import pytest
import yaml

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from trellobot.ai import AIProvider  # noqa: E402
from trellobot.config import Config  # noqa: E402
from trellobot.gmail import GmailClient  # noqa: E402
from trellobot.models import TrelloCard  # noqa: E402
from trellobot.notifier import Notifier  # noqa: E402
from trellobot.trello import TrelloClient  # noqa: E402

BASE_ENV = {
    "TRELLO_API_KEY": "trello-key",
    "TRELLO_TOKEN": "trello-token",
    "TRELLO_SENT_CV_LIST_ID": "L_SENT_CV",
    "TRELLO_ESTABLISHED_CONTACT_LIST_ID": "L_CONTACT",
    "TRELLO_INITIAL_INTERVIEW_LIST_ID": "L_INITIAL",
    "TRELLO_CODING_INTERVIEW_LIST_ID": "L_CODING",
    "TRELLO_ARCHITECTURE_INTERVIEW_LIST_ID": "L_ARCH",
    "TRELLO_MANAGEMENT_AND_HR_LIST_ID": "L_HR",
    "TRELLO_DROPPED_INITIAL_LIST_ID": "L_DROPPED",
    "TRELLO_JOB_DELETED_FROM_WEBSITE_LIST_ID": "L_JOB_DELETED",
    "GROQ_API_KEY": "gsk_test_key",
    "NTFY_TOPIC": "my-job-bot",
    "MY_EMAIL": "me@x.com",
}


@pytest.fixture
def make_config(tmp_path):
    """
    Build a Config from an environment dict and optional YAML settings.

    Returns:
        callable: make_config(env=None, settings=None, **overrides) -> Config
    """

    def _make(
        env: Optional[Dict[str, str]] = None,
        settings: Optional[Dict[str, Any]] = None,
        **overrides: Optional[str],
    ) -> Config:
        environ = dict(BASE_ENV if env is None else env)
        for name, value in overrides.items():
            if value is None:
                environ.pop(name, None)
            else:
                environ[name] = value

        config_path = tmp_path / "config.yaml"
        with open(config_path, "w") as f:
            yaml.dump(settings or {}, f)
        return Config(environ=environ, config_path=config_path)

    return _make


@pytest.fixture
def config(make_config):
    return make_config()


def make_card(card_id: str, name: str, desc: str = "", id_list: str = "L_SENT_CV") -> TrelloCard:
    return TrelloCard(id=card_id, name=name, desc=desc, id_list=id_list)


def gmail_message(
    msg_id: str = "msg-1",
    thread_id: str = "thread-1",
    sender: str = '"HR" <hr@acme.com>',
    to: str = "me@x.com",
    subject: str = "Your application",
    snippet: str = "Thank you for applying",
    internal_date: str = "1700000000000",
) -> Dict[str, Any]:
    """Gmail API response for messages.get(format='metadata')."""
    return {
        "id": msg_id,
        "threadId": thread_id,
        "snippet": snippet,
        "internalDate": internal_date,
        "payload": {
            "headers": [
                {"name": "From", "value": sender},
                {"name": "To", "value": to},
                {"name": "Subject", "value": subject},
            ]
        },
    }


@pytest.fixture
def mock_trello():
    trello = Mock(spec=TrelloClient)
    trello.get_list_cards.return_value = []
    trello.get_card_attachments.return_value = []
    return trello


@pytest.fixture
def mock_gmail():
    gmail = Mock(spec=GmailClient)
    gmail.list_unread.return_value = []
    gmail.mark_as_read.return_value = True
    return gmail


@pytest.fixture
def mock_notifier():
    notifier = Mock(spec=Notifier)
    notifier.send.return_value = True
    return notifier


@pytest.fixture
def mock_provider():
    provider = Mock(spec=AIProvider)
    provider.provider_name = "groq"
    provider.model_name = "llama-3.1-8b-instant"
    provider.browse_model_name = "groq/compound"
    return provider


def sent_titles(notifier: Mock) -> List[str]:
    return [c.args[0] for c in notifier.send.call_args_list]
