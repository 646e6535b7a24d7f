"""
Static keyword and pattern tables shared by the task parser, the filter
parser and the suggestion engine. Everything here is built once at import
and only read afterwards.
"""
import re

# Relative dates, checked in this order
RELATIVE_DATE_PATTERNS = {
    "today": re.compile(r"\btoday\b", re.IGNORECASE),
    "tomorrow": re.compile(r"\btomorrow\b", re.IGNORECASE),
    "next_week": re.compile(r"\bnext\s+week\b", re.IGNORECASE),
    "this_weekend": re.compile(r"\bthis\s+weekend\b", re.IGNORECASE),
    "next_weekend": re.compile(r"\bnext\s+weekend\b", re.IGNORECASE),
}

# Days of week, keyed by datetime.weekday() (0=Monday)
WEEKDAY_NAMES = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")
WEEKDAY_PATTERNS = {
    day: re.compile(rf"\b(?:next\s+)?{name}\b", re.IGNORECASE)
    for day, name in enumerate(WEEKDAY_NAMES)
}
SATURDAY = 5

# Numeric dates: M/D, M/D/YY, M/D/YYYY and the same with dashes.
# Never a piece of a longer number run such as 1/2/3 or 2024-12-25.
NUMERIC_DATE_PATTERNS = {
    "date_slash": re.compile(r"(?<![\w/-])(\d{1,2})/(\d{1,2})(?:/(\d{2,4}))?(?![\w/-])"),
    "date_dash": re.compile(r"(?<![\w/-])(\d{1,2})-(\d{1,2})(?:-(\d{2,4}))?(?![\w/-])"),
}

TIME_PATTERNS = {
    "at_time": re.compile(r"\bat\s+(\d{1,2})(?::(\d{2}))?\s*(am|pm)?\b", re.IGNORECASE),
    "time12": re.compile(r"\b(\d{1,2})(?::(\d{2}))?\s*(am|pm)\b", re.IGNORECASE),
    "time24": re.compile(r"\b(\d{1,2}):(\d{2})\b"),
}

# Named times of day and the clock time they stand for
NAMED_TIMES = {
    "noon": "12:00",
    "midnight": "00:00",
    "morning": "09:00",
    "afternoon": "14:00",
    "evening": "18:00",
}
NAMED_TIME_PATTERN = re.compile(r"\b(?:in\s+the\s+)?(" + "|".join(NAMED_TIMES) + r")\b", re.IGNORECASE)

# Priority sets, checked high -> low -> medium
PRIORITY_PATTERNS = {
    "high": re.compile(r"\b(urgent|important|asap|high priority|critical)\b", re.IGNORECASE),
    "low": re.compile(r"\b(low priority|when i can|sometime|eventually|minor)\b", re.IGNORECASE),
    "medium": re.compile(r"\b(medium priority|normal priority|moderate)\b", re.IGNORECASE),
}

REMINDER_PATTERN = re.compile(r"\b(remind me to|reminder to|don't forget to)\b", re.IGNORECASE)

WHITESPACE_RUN = re.compile(r"\s+")
EDGE_NON_WORD = re.compile(r"^\W+|\W+$")


# Suggestion keyword tables (create mode)

PRIORITY_KEYWORDS = (
    "urgent",
    "important",
    "asap",
    "critical",
    "high priority",
    "medium priority",
    "low priority",
    "normal",
    "moderate",
    "minor",
)

TIME_KEYWORDS = (
    "at 9am",
    "at 10am",
    "at 11am",
    "at 12pm",
    "at 1pm",
    "at 2pm",
    "at 3pm",
    "at 4pm",
    "at 5pm",
    "at 6pm",
    "at 7pm",
    "at 8pm",
    "morning",
    "afternoon",
    "evening",
    "noon",
    "midnight",
)

DATE_KEYWORDS = (
    "today",
    "tomorrow",
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
    "next week",
    "this weekend",
    "next weekend",
    "next monday",
    "next tuesday",
    "next wednesday",
    "next thursday",
    "next friday",
    "next saturday",
    "next sunday",
)

COMMON_TAGS = (
    "#work",
    "#personal",
    "#shopping",
    "#health",
    "#finance",
    "#family",
    "#urgent",
    "#meeting",
    "#call",
    "#email",
    "#research",
    "#project",
    "#home",
    "#office",
    "#travel",
    "#study",
    "#exercise",
    "#appointment",
)

PROJECT_KEYWORDS = (
    "for work",
    "for personal",
    "for project",
    "work project",
    "side project",
    "team project",
    "client work",
)

# Minimum completion-target length before a table is consulted
MIN_TOKEN_LENGTH = {
    "date": 1,
    "priority": 2,
    "time": 1,
    "tag": 2,
    "project": 2,
}

# Keyword categories where only one keyword may be active at a time
EXCLUSIVE_CATEGORIES = {
    "priority": PRIORITY_KEYWORDS,
    "time": TIME_KEYWORDS,
    "date": DATE_KEYWORDS,
}

# Context clusters: any trigger in the whole input unlocks the hints
CONTEXT_CLUSTERS = (
    (("meeting", "call", "interview"), ("at 10am", "at 2pm", "at 3pm", "#meeting", "urgent")),
    (("buy", "shop", "pick up"), ("#shopping", "#errands", "today", "tomorrow")),
    (("email", "report", "review"), ("#work", "urgent", "today", "#office")),
)


# Search filter DSL

FILTER_PREFIXES = ("priority", "project", "status", "due")

# Legal values per validated prefix; project is free-form
FILTER_VALUES = {
    "priority": ("high", "medium", "low"),
    "status": ("completed", "incomplete"),
    "due": ("today", "overdue"),
}

MAX_SUGGESTIONS = 8
