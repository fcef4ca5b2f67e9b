"""
Tests for ntfy push notifications.
"""

from unittest.mock import Mock

import requests

from trellobot.notifier import Notifier, truncate


def make_notifier(topic="my-job-bot", **kwargs):
    session = Mock(spec=requests.Session)
    session.post.return_value = Mock(status_code=200)
    return Notifier(topic, session=session, **kwargs), session


def test_send_posts_plain_text():
    notifier, session = make_notifier()

    assert notifier.send("Trello Bot: All Clear", "Processed 3 unread emails.") is True

    session.post.assert_called_once()
    args, kwargs = session.post.call_args
    assert args[0] == "https://ntfy.sh/my-job-bot"
    assert kwargs["data"] == "Processed 3 unread emails.".encode("utf-8")
    assert kwargs["headers"] == {
        "Title": "Trello Bot: All Clear",
        "Priority": "default",
        "Tags": "robot",
    }


def test_custom_server_and_tags():
    notifier, session = make_notifier(server="https://ntfy.example.com/")

    notifier.send("Trello Job Checker", "Checked 2 cards.", tags=("broom", "robot"))

    args, kwargs = session.post.call_args
    assert args[0] == "https://ntfy.example.com/my-job-bot"
    assert kwargs["headers"]["Tags"] == "broom,robot"


def test_no_topic_skips_silently():
    notifier, session = make_notifier(topic=None)

    assert notifier.enabled is False
    assert notifier.send("Title", "Body") is False
    session.post.assert_not_called()


def test_delivery_error_is_logged_not_raised(caplog):
    notifier, session = make_notifier()
    session.post.side_effect = requests.exceptions.ConnectionError("offline")

    assert notifier.send("Title", "Body") is False
    assert "Error sending notification" in caplog.text


def test_http_error_status_is_a_failure():
    notifier, session = make_notifier()
    response = Mock()
    response.raise_for_status.side_effect = requests.exceptions.HTTPError("429 Too Many Requests")
    session.post.return_value = response

    assert notifier.send("Title", "Body") is False


def test_from_config(config):
    notifier = Notifier.from_config(config)

    assert notifier.topic == "my-job-bot"
    assert notifier.server == "https://ntfy.sh"


def test_truncate():
    assert truncate("Short subject", 30) == "Short subject"
    assert truncate("x" * 30, 30) == "x" * 30
    assert truncate("x" * 31, 30) == "x" * 27 + "..."
    assert len(truncate("Application received for Backend Engineer", 30)) == 30
