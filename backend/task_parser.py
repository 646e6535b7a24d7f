"""
Natural language task parser.

Runs the extractors over one input string in a fixed order (date, time,
priority, reminder phrase), each stage working on what the previous one
left behind, then tidies the remainder into the task title.
"""
import logging
from datetime import date
from typing import Optional

from date_extractor import extract_date, extract_time
from models import ParsedTaskDraft, ParseOutcome
from patterns import EDGE_NON_WORD, WHITESPACE_RUN
from priority_extractor import clean_reminder_phrase, extract_priority

logger = logging.getLogger(__name__)


def final_cleanup(text: str) -> str:
    """Collapse whitespace runs and trim non-word characters off both ends."""
    text = WHITESPACE_RUN.sub(" ", text)
    text = EDGE_NON_WORD.sub("", text)
    return text.strip()


def parse_task(text: str, today: Optional[date] = None) -> ParseOutcome:
    """
    Parse free-form task text into a draft plus one human readable
    suggestion per extraction, in extraction order.

    A time is only consumed when a date was found; the date stays a plain
    calendar date and the time is kept in due_time/has_time_specified.
    Never raises: empty input gives an empty title and no suggestions.
    """
    suggestions: list[str] = []
    clean_title = text.strip()
    draft = ParsedTaskDraft(clean_title=clean_title)

    due_date, clean_title = extract_date(clean_title, today)
    if due_date:
        draft.due_date = due_date
        suggestions.append(f"Due date set to: {due_date}")

        due_time, remainder = extract_time(clean_title)
        if due_time:
            draft.due_time = due_time
            draft.has_time_specified = True
            clean_title = remainder
            suggestions.append(f"Time set to: {due_time}")

    priority, clean_title = extract_priority(clean_title)
    if priority:
        draft.priority = priority
        suggestions.append(f"Priority set to: {priority}")

    clean_title, was_reminder = clean_reminder_phrase(clean_title)
    if was_reminder:
        suggestions.append("Reminder language detected and cleaned")

    draft.clean_title = final_cleanup(clean_title)
    logger.debug("Parsed %r -> %s", text, draft.model_dump(exclude_none=True))
    return ParseOutcome(draft=draft, suggestions=suggestions)
