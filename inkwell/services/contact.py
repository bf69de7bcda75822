"""Contact form handling."""
import logging
from typing import Any, Dict

from inkwell.models.base import utcnow

logger = logging.getLogger(__name__)


def submit_contact_message(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Record a contact form submission.

    Messages are written to the application log only; no email is sent.

    Args:
        data: Validated contact data (see ``ContactForm.to_data``)

    Returns:
        The logged submission including its timestamp
    """
    submission = dict(data, submitted_at=utcnow().isoformat())
    logger.info(
        f"Contact form submission - Type: {submission.get('type')}, "
        f"From: {submission['name']} <{submission['email']}>, "
        f"Subject: {submission.get('subject') or '(none)'}"
    )
    logger.debug(f"Contact message body: {submission['message']}")
    return submission
