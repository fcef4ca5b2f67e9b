"""
Tests for routing classification labels to Trello lists.
"""

import pytest

from trellobot.models import ReplyLabel
from trellobot.routing import ROUTES, resolve_destination


def test_every_label_has_a_route_entry():
    assert set(ROUTES) == set(ReplyLabel)


@pytest.mark.parametrize(
    "label, list_id, list_name",
    [
        (ReplyLabel.INITIAL_INTERVIEW, "L_INITIAL", "Initial Interview"),
        (ReplyLabel.CODING_CHALLENGE, "L_CODING", "Coding Interview"),
        (ReplyLabel.TECHNICAL_INTERVIEW, "L_ARCH", "Architecture Interview"),
        (ReplyLabel.HR_INTERVIEW, "L_HR", "Management and HR"),
        (ReplyLabel.REJECTION, "L_DROPPED", "Dropped Initial"),
        (ReplyLabel.OTHER_REPLY, "L_CONTACT", "Established Contact"),
    ],
)
def test_routed_labels(config, label, list_id, list_name):
    destination = resolve_destination(label, config)

    assert destination.list_id == list_id
    assert destination.list_name == list_name


def test_offer_is_never_moved(config):
    assert resolve_destination(ReplyLabel.OFFER, config) is None


def test_unset_list_id_means_no_action(make_config):
    config = make_config(TRELLO_DROPPED_INITIAL_LIST_ID=None)

    assert resolve_destination(ReplyLabel.REJECTION, config) is None
    assert resolve_destination(ReplyLabel.HR_INTERVIEW, config) is not None
