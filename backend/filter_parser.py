"""
Search filter DSL.

    #tag               tag filter (repeatable)
    priority:high      low | medium | high
    project:work       project name substring
    status:completed   completed | incomplete
    due:today          today | overdue

Any other token is free text. A recognised prefix with an illegal value
is dropped entirely.
"""
from models import SearchFilters
from patterns import FILTER_VALUES


def parse_filters(query: str) -> SearchFilters:
    """Split query on whitespace and sort each token into exactly one field."""
    filters = SearchFilters()
    text_parts: list[str] = []

    for part in query.split():
        if part.startswith("#"):
            tag = part[1:].lower()
            if tag:
                filters.tags.append(tag)
        elif part.startswith("priority:"):
            priority = part[len("priority:"):].lower()
            if priority in FILTER_VALUES["priority"]:
                filters.priority = priority
        elif part.startswith("project:"):
            filters.project_name = part[len("project:"):].lower()
        elif part.startswith("status:"):
            status = part[len("status:"):].lower()
            if status in FILTER_VALUES["status"]:
                filters.status = status
        elif part.startswith("due:"):
            due = part[len("due:"):].lower()
            if due in FILTER_VALUES["due"]:
                filters.due = due
        else:
            text_parts.append(part)

    filters.text = " ".join(text_parts)
    return filters


def serialize_filters(filters: SearchFilters) -> str:
    """Canonical query string for filters; parse_filters reads it back to the same value."""
    parts = [filters.text] if filters.text else []
    parts.extend(f"#{tag}" for tag in filters.tags)
    if filters.priority:
        parts.append(f"priority:{filters.priority}")
    if filters.project_name is not None:
        parts.append(f"project:{filters.project_name}")
    if filters.status:
        parts.append(f"status:{filters.status}")
    if filters.due:
        parts.append(f"due:{filters.due}")
    return " ".join(parts)
