"""
Tests for the Trello REST client.
"""

from unittest.mock import Mock

import pytest
import requests

from trellobot.models import TrelloCard
from trellobot.trello import TRELLO_BASE_URL, TrelloClient, TrelloError


def make_client(payload=None, error=None):
    session = Mock(spec=requests.Session)
    response = Mock()
    response.json.return_value = payload
    if error is not None:
        response.raise_for_status.side_effect = error
    session.request.return_value = response
    return TrelloClient("key-123", "token-456", session=session), session


def test_get_list_cards():
    client, session = make_client(
        [
            {"id": "c1", "name": "Acme", "desc": "domain: acme.com", "idList": "L1"},
            {"id": "c2", "name": "Globex", "desc": None, "idList": "L1"},
        ]
    )

    cards = client.get_list_cards("L1")

    assert cards == [
        TrelloCard(id="c1", name="Acme", desc="domain: acme.com", id_list="L1"),
        TrelloCard(id="c2", name="Globex", desc="", id_list="L1"),
    ]
    session.request.assert_called_once_with(
        "get",
        f"{TRELLO_BASE_URL}/lists/L1/cards",
        params={"key": "key-123", "token": "token-456"},
        timeout=15,
    )


def test_get_card_attachments():
    attachments = [{"id": "a1", "isUpload": False, "url": "https://jobs.acme.com/1"}]
    client, session = make_client(attachments)

    assert client.get_card_attachments("c1") == attachments
    assert session.request.call_args.args[1] == f"{TRELLO_BASE_URL}/cards/c1/attachments"


def test_move_card_sends_target_list():
    client, session = make_client({"id": "c1", "idList": "L2"})

    client.move_card("c1", "L2")

    method, url = session.request.call_args.args
    assert method == "put"
    assert url == f"{TRELLO_BASE_URL}/cards/c1"
    assert session.request.call_args.kwargs["params"] == {
        "key": "key-123",
        "token": "token-456",
        "idList": "L2",
    }


def test_http_error_raises_trello_error():
    response = Mock(status_code=401, reason="Unauthorized")
    client, _ = make_client(error=requests.exceptions.HTTPError(response=response))

    with pytest.raises(TrelloError) as exc_info:
        client.move_card("c1", "L2")

    message = str(exc_info.value)
    assert message == "PUT /cards/c1 failed: HTTP 401 Unauthorized"
    assert "key-123" not in message
    assert "token-456" not in message


def test_network_error_raises_trello_error():
    client, session = make_client()
    session.request.side_effect = requests.exceptions.ConnectionError("connection refused")

    with pytest.raises(TrelloError, match="GET /lists/L1/cards failed: ConnectionError"):
        client.get_list_cards("L1")


def test_custom_base_url_and_timeout():
    session = Mock(spec=requests.Session)
    session.request.return_value.json.return_value = []
    client = TrelloClient("k", "t", session=session, base_url="http://localhost:9000/1/", timeout=3)

    client.get_list_cards("L1")

    assert session.request.call_args.args[1] == "http://localhost:9000/1/lists/L1/cards"
    assert session.request.call_args.kwargs["timeout"] == 3
