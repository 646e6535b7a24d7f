import sqlite3
import logging
import os
import uuid
from datetime import datetime
from typing import Optional
from contextlib import contextmanager
from dotenv import load_dotenv

from models import Folder, Mode, Project, Subtask, Task

logger = logging.getLogger(__name__)

load_dotenv()

DATABASE_PATH = os.getenv("TASKS_DATABASE_PATH", "tasks.db")

SEARCHBAR_MODE_KEY = "searchbar_mode"
DEFAULT_MODE: Mode = "search"

@contextmanager
def get_db():
    """Context manager for database connections."""
    conn = sqlite3.connect(DATABASE_PATH)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    try:
        yield conn
    finally:
        conn.close()

def init_db():
    """Initialize database by running Alembic migrations."""
    import subprocess

    # Run alembic upgrade from the backend directory
    backend_dir = os.path.dirname(os.path.abspath(__file__))
    subprocess.run(
        ["alembic", "upgrade", "head"],
        cwd=backend_dir,
        check=True
    )

def _tags_for_task(conn, task_id: str) -> list[str]:
    rows = conn.execute(
        "SELECT tag FROM tags WHERE task_id = ? ORDER BY rowid",
        (task_id,)
    ).fetchall()
    return [row["tag"] for row in rows]

def _save_tags(conn, task_id: str, tags: list[str]):
    """Replace the tag set of a task. Duplicates collapse, order is kept."""
    conn.execute("DELETE FROM tags WHERE task_id = ?", (task_id,))
    for tag in dict.fromkeys(tags):
        conn.execute("INSERT INTO tags (task_id, tag) VALUES (?, ?)", (task_id, tag))

def _subtasks_for_task(conn, task_id: str) -> list[Subtask]:
    rows = conn.execute(
        "SELECT id, text, completed FROM subtasks WHERE task_id = ? ORDER BY rowid",
        (task_id,)
    ).fetchall()
    return [Subtask(id=row["id"], text=row["text"], completed=bool(row["completed"])) for row in rows]

def _save_subtasks(conn, task_id: str, texts: list[str]):
    """Replace the subtasks of a task with fresh, open ones."""
    conn.execute("DELETE FROM subtasks WHERE task_id = ?", (task_id,))
    for text in texts:
        conn.execute(
            "INSERT INTO subtasks (id, task_id, text, completed) VALUES (?, ?, ?, 0)",
            (str(uuid.uuid4()), task_id, text)
        )

def _row_to_task(conn, row) -> Task:
    """Convert a database row to a Task model."""
    return Task(
        id=row["id"],
        title=row["title"],
        description=row["description"] or "",
        due_date=row["due_date"],
        priority=row["priority"],
        completed=bool(row["completed"]),
        project_id=row["project_id"],
        tags=_tags_for_task(conn, row["id"]),
        subtasks=_subtasks_for_task(conn, row["id"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


# Task operations

def get_all_tasks() -> list[Task]:
    with get_db() as conn:
        rows = conn.execute("""
            SELECT * FROM tasks
            ORDER BY
                CASE WHEN due_date IS NULL THEN 1 ELSE 0 END,
                due_date,
                created_at
        """).fetchall()
        return [_row_to_task(conn, row) for row in rows]

def get_task_db(task_id: str) -> Optional[Task]:
    with get_db() as conn:
        row = conn.execute("SELECT * FROM tasks WHERE id = ?", (task_id,)).fetchone()
        if row:
            return _row_to_task(conn, row)
    return None

def create_task_db(
    task_id: str,
    title: str,
    description: str = "",
    due_date: Optional[str] = None,
    priority: str = "medium",
    project_id: Optional[int] = None,
    tags: Optional[list[str]] = None,
    subtasks: Optional[list[str]] = None
) -> Task:
    """Create a task. due_date is YYYY-MM-DD; tags and subtasks keep their given order."""
    now = datetime.now().isoformat()
    tags = tags or []
    with get_db() as conn:
        conn.execute(
            """INSERT INTO tasks
               (id, title, description, due_date, priority, completed, project_id, created_at, updated_at)
               VALUES (?, ?, ?, ?, ?, 0, ?, ?, ?)""",
            (task_id, title, description, due_date, priority, project_id, now, now)
        )
        _save_tags(conn, task_id, tags)
        _save_subtasks(conn, task_id, subtasks or [])
        conn.commit()
        logger.info("Created task %s: %r", task_id, title)
        row = conn.execute("SELECT * FROM tasks WHERE id = ?", (task_id,)).fetchone()
        return _row_to_task(conn, row)

def update_task_db(task_id: str, **updates) -> Optional[Task]:
    """
    Update a task with any fields provided.
    Only updates fields that differ from current values.

    Args:
        task_id: Task ID to update
        **updates: Field names and values to update (title, description, due_date,
                   priority, completed, project_id, tags, subtasks).
                   subtasks is a list of texts and replaces every existing subtask.
    """
    with get_db() as conn:
        row = conn.execute("SELECT * FROM tasks WHERE id = ?", (task_id,)).fetchone()
        if not row:
            return None

        keys = row.keys()
        tags = updates.pop("tags", None)
        subtask_texts = updates.pop("subtasks", None)

        # Filter updates: only include fields that differ from current values
        changes = {}
        for field, new_value in updates.items():
            if field not in keys:
                continue
            # Convert bool to int for comparison with SQLite storage
            if isinstance(new_value, bool):
                new_value = int(new_value)
            if new_value != row[field]:
                changes[field] = new_value

        tags_changed = tags is not None and tags != _tags_for_task(conn, task_id)
        if tags_changed:
            _save_tags(conn, task_id, tags)

        current_texts = [subtask.text for subtask in _subtasks_for_task(conn, task_id)]
        subtasks_changed = subtask_texts is not None and subtask_texts != current_texts
        if subtasks_changed:
            _save_subtasks(conn, task_id, subtask_texts)

        # Execute UPDATE only if there are actual changes
        if changes or tags_changed or subtasks_changed:
            changes["updated_at"] = datetime.now().isoformat()
            set_clause = ", ".join(f"{field} = ?" for field in changes.keys())
            values = list(changes.values()) + [task_id]
            conn.execute(f"UPDATE tasks SET {set_clause} WHERE id = ?", values)
            conn.commit()
            logger.info("Updated task %s: %s", task_id, sorted(changes))

        # Return updated task (re-fetch to get current state)
        updated_row = conn.execute("SELECT * FROM tasks WHERE id = ?", (task_id,)).fetchone()
        return _row_to_task(conn, updated_row)

def delete_task_db(task_id: str) -> bool:
    with get_db() as conn:
        cursor = conn.execute("DELETE FROM tasks WHERE id = ?", (task_id,))
        conn.commit()
        return cursor.rowcount > 0

def toggle_subtask_db(subtask_id: str, completed: bool) -> Optional[Subtask]:
    """Mark a single subtask done or open. Returns None if it does not exist."""
    with get_db() as conn:
        cursor = conn.execute(
            "UPDATE subtasks SET completed = ? WHERE id = ?",
            (int(completed), subtask_id)
        )
        if cursor.rowcount == 0:
            return None
        conn.commit()
        row = conn.execute("SELECT id, text, completed FROM subtasks WHERE id = ?", (subtask_id,)).fetchone()
        return Subtask(id=row["id"], text=row["text"], completed=bool(row["completed"]))

def get_all_tags() -> list[str]:
    """Distinct tags across all tasks, alphabetical."""
    with get_db() as conn:
        rows = conn.execute("SELECT DISTINCT tag FROM tags ORDER BY tag").fetchall()
        return [row["tag"] for row in rows]


# Project and folder operations

def get_all_projects() -> list[Project]:
    with get_db() as conn:
        rows = conn.execute("SELECT * FROM projects ORDER BY id").fetchall()
        return [Project(**dict(row)) for row in rows]

def create_project_db(
    name: str,
    color: str,
    description: Optional[str] = None,
    folder_id: Optional[int] = None
) -> Project:
    with get_db() as conn:
        cursor = conn.execute(
            "INSERT INTO projects (name, color, description, folder_id) VALUES (?, ?, ?, ?)",
            (name, color, description, folder_id)
        )
        conn.commit()
        logger.info("Created project %d: %r", cursor.lastrowid, name)
        return Project(id=cursor.lastrowid, name=name, color=color, description=description, folder_id=folder_id)

def delete_project_db(project_id: int) -> bool:
    """Delete a project; its tasks are kept and become unassigned."""
    with get_db() as conn:
        conn.execute("UPDATE tasks SET project_id = NULL WHERE project_id = ?", (project_id,))
        cursor = conn.execute("DELETE FROM projects WHERE id = ?", (project_id,))
        conn.commit()
        return cursor.rowcount > 0

def get_all_folders() -> list[Folder]:
    with get_db() as conn:
        rows = conn.execute("SELECT * FROM folders ORDER BY id").fetchall()
        return [Folder(**dict(row)) for row in rows]

def create_folder_db(name: str, color: str, description: Optional[str] = None) -> Folder:
    with get_db() as conn:
        cursor = conn.execute(
            "INSERT INTO folders (name, color, description) VALUES (?, ?, ?)",
            (name, color, description)
        )
        conn.commit()
        logger.info("Created folder %d: %r", cursor.lastrowid, name)
        return Folder(id=cursor.lastrowid, name=name, color=color, description=description)

def delete_folder_db(folder_id: int) -> bool:
    """Delete a folder; its projects are kept and move to the top level."""
    with get_db() as conn:
        conn.execute("UPDATE projects SET folder_id = NULL WHERE folder_id = ?", (folder_id,))
        cursor = conn.execute("DELETE FROM folders WHERE id = ?", (folder_id,))
        conn.commit()
        return cursor.rowcount > 0


# Settings operations

def get_setting(key: str) -> Optional[str]:
    with get_db() as conn:
        row = conn.execute("SELECT value FROM settings WHERE key = ?", (key,)).fetchone()
        return row["value"] if row else None

def save_setting(key: str, value: str):
    with get_db() as conn:
        conn.execute(
            "INSERT INTO settings (key, value) VALUES (?, ?) "
            "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
            (key, value)
        )
        conn.commit()

def get_searchbar_mode() -> Mode:
    """Persisted input mode; anything unknown reads as the default."""
    mode = get_setting(SEARCHBAR_MODE_KEY)
    if mode in ("search", "create"):
        return mode
    return DEFAULT_MODE

def set_searchbar_mode(mode: Mode):
    save_setting(SEARCHBAR_MODE_KEY, mode)
    logger.info("Search bar mode set to %s", mode)
