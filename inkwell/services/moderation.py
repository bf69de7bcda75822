"""Content moderation service for comment text."""
import logging
from typing import Any, Dict
from flask import current_app
from better_profanity import profanity

logger = logging.getLogger(__name__)


class ContentModerationService:
    """Service for flagging comment text with profanity filtering."""

    def __init__(self):
        """Initialize the moderation service."""
        profanity.load_censor_words()

    def moderate_text(self, text: str) -> Dict[str, Any]:
        """
        Moderate text content for profanity.

        Args:
            text: Text content to moderate

        Returns:
            Dict containing moderation results
        """
        if not current_app.config.get('PROFANITY_FILTER_ENABLED', True):
            return {
                'is_flagged': False,
                'censored_text': text,
                'reason': None
            }

        contains_profanity = profanity.contains_profanity(text)
        result = {
            'is_flagged': contains_profanity,
            'censored_text': profanity.censor(text) if contains_profanity else text,
            'reason': 'inappropriate_language' if contains_profanity else None
        }

        if contains_profanity:
            logger.warning("Comment text flagged for profanity")

        return result


# Global service instance
_moderation_service = None


def get_moderation_service() -> ContentModerationService:
    """Get moderation service instance."""
    global _moderation_service
    if _moderation_service is None:
        _moderation_service = ContentModerationService()
    return _moderation_service
