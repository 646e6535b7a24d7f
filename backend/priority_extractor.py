import logging
from typing import Optional

from models import Priority
from patterns import PRIORITY_PATTERNS, REMINDER_PATTERN

logger = logging.getLogger(__name__)


def extract_priority(text: str) -> tuple[Optional[Priority], str]:
    """
    Find a priority keyword in text.
    The high set wins over the low set, the medium set is checked last.
    Only the first occurrence of the winning set is removed.
    """
    for priority, pattern in PRIORITY_PATTERNS.items():
        match = pattern.search(text)
        if match:
            logger.debug("Matched %s priority keyword %r", priority, match.group(0))
            return priority, (text[:match.start()] + text[match.end():]).strip()
    return None, text


def clean_reminder_phrase(text: str) -> tuple[str, bool]:
    """Strip conversational openers like "remind me to". Returns (text, was_reminder)."""
    match = REMINDER_PATTERN.search(text)
    if not match:
        return text, False
    return (text[:match.start()] + text[match.end():]).strip(), True
