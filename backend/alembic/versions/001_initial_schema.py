"""Initial schema - folders, projects, tasks and tags

Revision ID: 001
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
from sqlalchemy import text

revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    conn = op.get_bind()

    conn.execute(text("""
        CREATE TABLE IF NOT EXISTS folders (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            color TEXT NOT NULL,
            description TEXT
        )
    """))

    conn.execute(text("""
        CREATE TABLE IF NOT EXISTS projects (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            color TEXT NOT NULL,
            description TEXT,
            folder_id INTEGER REFERENCES folders (id)
        )
    """))

    conn.execute(text("""
        CREATE TABLE IF NOT EXISTS tasks (
            id TEXT PRIMARY KEY,
            title TEXT NOT NULL,
            description TEXT,
            due_date TEXT,
            priority TEXT NOT NULL DEFAULT 'medium',
            completed INTEGER NOT NULL DEFAULT 0,
            project_id INTEGER REFERENCES projects (id),
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        )
    """))

    conn.execute(text("""
        CREATE TABLE IF NOT EXISTS tags (
            task_id TEXT NOT NULL REFERENCES tasks (id) ON DELETE CASCADE,
            tag TEXT NOT NULL,
            PRIMARY KEY (task_id, tag)
        )
    """))

    conn.execute(text("CREATE INDEX IF NOT EXISTS idx_tasks_project_id ON tasks (project_id)"))
    conn.execute(text("CREATE INDEX IF NOT EXISTS idx_tasks_due_date ON tasks (due_date)"))
    conn.execute(text("CREATE INDEX IF NOT EXISTS idx_tags_task_id ON tags (task_id)"))


def downgrade() -> None:
    conn = op.get_bind()
    conn.execute(text("DROP TABLE IF EXISTS tags"))
    conn.execute(text("DROP TABLE IF EXISTS tasks"))
    conn.execute(text("DROP TABLE IF EXISTS projects"))
    conn.execute(text("DROP TABLE IF EXISTS folders"))
