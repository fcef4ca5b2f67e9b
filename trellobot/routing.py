"""
Label-to-List Router - where a classified reply sends its card.

Every ReplyLabel has an entry. OFFER deliberately has no destination and
leaves the card where it is.
"""

import logging
from typing import Dict, Optional, Tuple

from . import config as cfg
from .config import Config
from .models import Destination, ReplyLabel

logger = logging.getLogger(__name__)

# label -> (list id env var, list name), None for "no action"
ROUTES: Dict[ReplyLabel, Optional[Tuple[str, str]]] = {
    ReplyLabel.INITIAL_INTERVIEW: (cfg.INITIAL_INTERVIEW_LIST, "Initial Interview"),
    ReplyLabel.CODING_CHALLENGE: (cfg.CODING_INTERVIEW_LIST, "Coding Interview"),
    ReplyLabel.TECHNICAL_INTERVIEW: (cfg.ARCHITECTURE_INTERVIEW_LIST, "Architecture Interview"),
    ReplyLabel.HR_INTERVIEW: (cfg.MANAGEMENT_AND_HR_LIST, "Management and HR"),
    ReplyLabel.REJECTION: (cfg.DROPPED_INITIAL_LIST, "Dropped Initial"),
    ReplyLabel.OTHER_REPLY: (cfg.ESTABLISHED_CONTACT_LIST, "Established Contact"),
    ReplyLabel.OFFER: None,
}

_unrouted = set(ReplyLabel) - set(ROUTES)
if _unrouted:
    raise RuntimeError(f"No route defined for labels: {sorted(l.value for l in _unrouted)}")


def resolve_destination(label: ReplyLabel, config: Config) -> Optional[Destination]:
    """
    Destination list for a label.

    Returns:
        Destination, or None when the label has no route or its
        list id is not configured
    """
    route = ROUTES[label]
    if route is None:
        logger.info(f"AI classified as {label.value}. No list ID configured.")
        return None

    env_name, list_name = route
    list_id = config.list_id(env_name)
    if not list_id:
        logger.info(f"{env_name} is not set. {label.value} replies are not moved.")
        return None

    return Destination(list_id=list_id, list_name=list_name)
