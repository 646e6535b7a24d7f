import logging
import re
from datetime import date, timedelta
from typing import Optional

from patterns import (
    NAMED_TIME_PATTERN,
    NAMED_TIMES,
    NUMERIC_DATE_PATTERNS,
    RELATIVE_DATE_PATTERNS,
    SATURDAY,
    TIME_PATTERNS,
    WEEKDAY_PATTERNS,
)

logger = logging.getLogger(__name__)


def _remove_first(pattern: re.Pattern, text: str) -> str:
    return pattern.sub("", text, count=1).strip()


def next_weekday(target_day: int, today: date) -> date:
    """
    Next future occurrence of target_day (0=Monday).
    Never returns today: if today is target_day, the result is a week out.
    """
    days_until = (target_day - today.weekday()) % 7
    if days_until == 0:
        days_until = 7
    return today + timedelta(days=days_until)


def _weekend_saturday(today: date) -> date:
    """Saturday of the current weekend (yesterday on a Sunday)."""
    return today + timedelta(days=SATURDAY - today.weekday())


def _relative_date(key: str, today: date) -> date:
    if key == "today":
        return today
    if key == "tomorrow":
        return today + timedelta(days=1)
    if key == "next_week":
        return today + timedelta(weeks=1)
    saturday = _weekend_saturday(today)
    if key == "this_weekend":
        return max(saturday, today)
    return saturday + timedelta(weeks=1)


def _numeric_date(match: re.Match, today: date) -> Optional[date]:
    """
    Build a date from an M/D[/Y] match.
    Two-digit years are read as 20YY, a missing year is the current year.
    Returns None for impossible dates such as 13/45.
    """
    month, day, year = match.groups()
    if year is None:
        full_year = today.year
    elif len(year) == 2:
        full_year = 2000 + int(year)
    else:
        full_year = int(year)
    try:
        return date(full_year, int(month), int(day))
    except ValueError:
        return None


def extract_date(text: str, today: Optional[date] = None) -> tuple[Optional[str], str]:
    """
    Find one date expression in text.

    Precedence: today, tomorrow, next week / weekends, weekday names
    (optionally prefixed by "next"), then numeric M/D and M-D dates.
    Returns (ISO date or None, text with the expression removed).
    When nothing matches the text is returned unchanged.
    """
    today = today or date.today()

    for key, pattern in RELATIVE_DATE_PATTERNS.items():
        if pattern.search(text):
            found = _relative_date(key, today)
            logger.debug("Matched relative date %r -> %s", key, found)
            return found.isoformat(), _remove_first(pattern, text)

    for day, pattern in WEEKDAY_PATTERNS.items():
        if pattern.search(text):
            found = next_weekday(day, today)
            logger.debug("Matched weekday %d -> %s", day, found)
            return found.isoformat(), _remove_first(pattern, text)

    for key, pattern in NUMERIC_DATE_PATTERNS.items():
        match = pattern.search(text)
        if not match:
            continue
        found = _numeric_date(match, today)
        if found is None:
            logger.debug("Ignoring impossible %s value %r", key, match.group(0))
            continue
        cleaned = (text[:match.start()] + text[match.end():]).strip()
        return found.isoformat(), cleaned

    return None, text


def convert_to_24_hour(hour: int, period: str) -> int:
    period = period.lower()
    if period == "pm" and hour != 12:
        return hour + 12
    if period == "am" and hour == 12:
        return 0
    return hour


def _clock(hour: int, minutes: str) -> Optional[str]:
    if 0 <= hour <= 23 and 0 <= int(minutes) <= 59:
        return f"{hour:02d}:{minutes}"
    return None


def extract_time(text: str) -> tuple[Optional[str], str]:
    """
    Find one time expression in text.

    Precedence: "at H[:MM][am|pm]" (no period means am), bare
    "H[:MM] am|pm", 24-hour "HH:MM", then named times like "noon".
    Returns ("HH:MM" or None, text with the expression removed).
    """
    for key in ("at_time", "time12"):
        match = TIME_PATTERNS[key].search(text)
        if not match:
            continue
        hours, minutes, period = match.groups()
        time = _clock(convert_to_24_hour(int(hours), period or "am"), minutes or "00")
        if time:
            logger.debug("Matched %s %r -> %s", key, match.group(0), time)
            return time, (text[:match.start()] + text[match.end():]).strip()

    match = TIME_PATTERNS["time24"].search(text)
    if match:
        hours, minutes = match.groups()
        time = _clock(int(hours), minutes)
        if time:
            return time, (text[:match.start()] + text[match.end():]).strip()

    match = NAMED_TIME_PATTERN.search(text)
    if match:
        time = NAMED_TIMES[match.group(1).lower()]
        return time, (text[:match.start()] + text[match.end():]).strip()

    return None, text
