import logging
from datetime import date
from typing import Iterable, Optional

from models import Project, SearchFilters, Task

logger = logging.getLogger(__name__)


def _parse_due(due_date: Optional[str]) -> Optional[date]:
    """Calendar date of a stored due_date (YYYY-MM-DD, time suffix ignored)."""
    if not due_date:
        return None
    try:
        return date.fromisoformat(due_date[:10])
    except ValueError:
        logger.debug("Unparseable due date %r", due_date)
        return None


def is_overdue(due_date: Optional[str], today: Optional[date] = None) -> bool:
    """True when due_date falls before today. Missing or bad dates are never overdue."""
    due = _parse_due(due_date)
    if due is None:
        return False
    return due < (today or date.today())


def matches_filters(
    task: Task,
    filters: SearchFilters,
    project_names: dict[int, str],
    today: date,
) -> bool:
    """Check a single task against every populated field of filters."""
    if filters.text:
        search_text = filters.text.lower()
        if search_text not in task.title.lower() and search_text not in (task.description or "").lower():
            return False

    # Any filter tag contained in any task tag
    if filters.tags:
        task_tags = [tag.lower() for tag in task.tags]
        if not any(wanted in tag for wanted in filters.tags for tag in task_tags):
            return False

    if filters.priority and task.priority != filters.priority:
        return False

    if filters.project_name:
        project_name = project_names.get(task.project_id) if task.project_id is not None else None
        if not project_name or filters.project_name not in project_name.lower():
            return False

    if filters.status == "completed" and not task.completed:
        return False
    if filters.status == "incomplete" and task.completed:
        return False

    if filters.due == "today" and _parse_due(task.due_date) != today:
        return False
    if filters.due == "overdue" and (task.completed or not is_overdue(task.due_date, today)):
        return False

    return True


def _due_sort_key(task: Task) -> tuple[int, date]:
    due = _parse_due(task.due_date)
    return (0, due) if due else (1, date.min)


def filter_tasks(
    tasks: Iterable[Task],
    filters: SearchFilters,
    projects: Iterable[Project] = (),
    today: Optional[date] = None,
) -> list[Task]:
    """
    Tasks matching filters, ordered by due date (undated tasks last).
    projects resolves project_id -> name for the project: filter.
    """
    today = today or date.today()
    project_names = {project.id: project.name for project in projects}
    matched = [task for task in tasks if matches_filters(task, filters, project_names, today)]
    return sorted(matched, key=_due_sort_key)
