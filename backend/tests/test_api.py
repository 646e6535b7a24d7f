"""
Tests for FastAPI endpoints in main.py.
"""
import pytest
import sys
import os
from datetime import date, timedelta

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from database import create_project_db, create_task_db


class TestTaskEndpoints:
    """Tests for /tasks endpoints."""

    def test_get_tasks_empty(self, app_client):
        """GET /tasks returns empty list when no tasks."""
        response = app_client.get("/tasks")
        assert response.status_code == 200
        assert response.json() == []

    def test_create_task(self, app_client):
        """POST /tasks creates a task with defaults."""
        response = app_client.post("/tasks", json={"title": "Write tests", "tags": ["dev"]})
        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Write tests"
        assert data["tags"] == ["dev"]
        assert data["priority"] == "medium"

    def test_create_task_invalid_priority(self, app_client):
        """POST /tasks rejects an unknown priority."""
        response = app_client.post("/tasks", json={"title": "X", "priority": "extreme"})
        assert response.status_code == 422

    def test_create_task_from_text(self, app_client):
        """POST /tasks/from-text stores the parsed draft."""
        response = app_client.post("/tasks/from-text", json={
            "input": "Remind me to buy groceries tomorrow urgent",
            "tags": ["shopping"]
        })
        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "buy groceries"
        assert data["due_date"] == (date.today() + timedelta(days=1)).isoformat()
        assert data["priority"] == "high"
        assert data["tags"] == ["shopping"]

    def test_create_task_from_text_without_title(self, app_client):
        """POST /tasks/from-text rejects input with no title left."""
        response = app_client.post("/tasks/from-text", json={"input": "tomorrow urgent"})
        assert response.status_code == 422

    def test_update_task_title(self, test_db, app_client):
        """PATCH /tasks/{id} updates title."""
        create_task_db("id-1", "Old title")

        response = app_client.patch("/tasks/id-1", json={"title": "New title"})
        assert response.status_code == 200
        assert response.json()["title"] == "New title"

    def test_update_task_completed(self, test_db, app_client):
        """PATCH /tasks/{id} marks task completed."""
        create_task_db("id-1", "Complete me", due_date="2025-01-20")

        response = app_client.patch("/tasks/id-1", json={"completed": True})
        assert response.status_code == 200
        data = response.json()
        assert data["completed"] is True
        assert data["due_date"] == "2025-01-20"

    def test_update_task_not_found(self, app_client):
        """PATCH /tasks/{id} returns 404 for nonexistent task."""
        response = app_client.patch("/tasks/nonexistent", json={"title": "New title"})
        assert response.status_code == 404

    def test_delete_task(self, test_db, app_client):
        """DELETE /tasks/{id} removes task."""
        create_task_db("id-1", "Delete me")

        response = app_client.delete("/tasks/id-1")
        assert response.status_code == 200
        assert response.json()["status"] == "deleted"
        assert app_client.get("/tasks").json() == []

    def test_delete_task_not_found(self, app_client):
        """DELETE /tasks/{id} returns 404 for nonexistent task."""
        response = app_client.delete("/tasks/nonexistent")
        assert response.status_code == 404

    def test_get_tags(self, test_db, app_client):
        """GET /tags lists live tags."""
        create_task_db("id-1", "A", tags=["work"])
        assert app_client.get("/tags").json() == ["work"]


class TestSubtaskEndpoints:
    """Tests for subtasks through /tasks and /subtasks."""

    def test_create_task_with_subtasks(self, app_client):
        """POST /tasks stores subtask texts as open subtasks."""
        response = app_client.post("/tasks", json={"title": "Move house", "subtasks": ["Boxes", "Van"]})
        assert response.status_code == 200
        subtasks = response.json()["subtasks"]
        assert [subtask["text"] for subtask in subtasks] == ["Boxes", "Van"]
        assert [subtask["completed"] for subtask in subtasks] == [False, False]

    def test_toggle_subtask(self, test_db, app_client):
        """PATCH /subtasks/{id} marks one subtask done."""
        task = create_task_db("id-1", "Move house", subtasks=["Boxes", "Van"])

        response = app_client.patch(f"/subtasks/{task.subtasks[1].id}", json={"completed": True})
        assert response.status_code == 200
        assert response.json()["completed"] is True

        stored = app_client.get("/tasks").json()[0]["subtasks"]
        assert [subtask["completed"] for subtask in stored] == [False, True]

    def test_toggle_subtask_not_found(self, app_client):
        """PATCH /subtasks/{id} returns 404 for nonexistent subtask."""
        response = app_client.patch("/subtasks/nonexistent", json={"completed": True})
        assert response.status_code == 404

    def test_patch_task_replaces_subtasks(self, test_db, app_client):
        """PATCH /tasks/{id} with subtasks swaps the list."""
        create_task_db("id-1", "Move house", subtasks=["Boxes"])

        response = app_client.patch("/tasks/id-1", json={"subtasks": ["Keys"]})
        assert [subtask["text"] for subtask in response.json()["subtasks"]] == ["Keys"]


class TestProjectFolderEndpoints:
    """Tests for /projects and /folders endpoints."""

    def test_project_lifecycle(self, app_client):
        """Projects can be created, listed and deleted."""
        created = app_client.post("/projects", json={"name": "Work"}).json()
        assert created["name"] == "Work"
        assert app_client.get("/projects").json() == [created]

        assert app_client.delete(f"/projects/{created['id']}").status_code == 200
        assert app_client.delete(f"/projects/{created['id']}").status_code == 404

    def test_folder_lifecycle(self, app_client):
        """Folders can be created, listed and deleted."""
        created = app_client.post("/folders", json={"name": "Clients", "color": "#123456"}).json()
        assert app_client.get("/folders").json() == [created]
        assert app_client.delete(f"/folders/{created['id']}").status_code == 200
        assert app_client.delete(f"/folders/{created['id']}").status_code == 404


class TestModeEndpoints:
    """Tests for the persisted search bar mode."""

    def test_default_mode(self, app_client):
        """GET /settings/mode starts in search mode."""
        assert app_client.get("/settings/mode").json() == {"mode": "search"}

    def test_switch_mode(self, app_client):
        """PUT /settings/mode persists the mode."""
        assert app_client.put("/settings/mode", json={"mode": "create"}).json() == {"mode": "create"}
        assert app_client.get("/settings/mode").json() == {"mode": "create"}

    def test_invalid_mode(self, app_client):
        """PUT /settings/mode rejects unknown modes."""
        assert app_client.put("/settings/mode", json={"mode": "kanban"}).status_code == 422


class TestTextEndpoints:
    """Tests for parsing, search and suggestion endpoints."""

    def test_parse(self, app_client):
        """POST /parse previews the draft and notes."""
        response = app_client.post("/parse", json={"input": "Call dentist urgent #health"})
        assert response.status_code == 200
        data = response.json()
        assert data["draft"]["clean_title"] == "Call dentist #health"
        assert data["draft"]["priority"] == "high"
        assert data["suggestions"] == ["Priority set to: high"]

    def test_filters(self, app_client):
        """POST /filters returns the parsed filters."""
        response = app_client.post("/filters", json={"query": "priority:high #urgent project:work"})
        assert response.json() == {
            "text": "",
            "tags": ["urgent"],
            "priority": "high",
            "project_name": "work",
            "status": None,
            "due": None,
        }

    def test_search(self, test_db, app_client):
        """POST /search filters stored tasks."""
        work = create_project_db("Work", "#000000")
        create_task_db("id-1", "Ship release", priority="high", project_id=work.id, tags=["urgent"])
        create_task_db("id-2", "Ship groceries", priority="high", tags=["urgent"])
        create_task_db("id-3", "Ship docs", project_id=work.id)

        response = app_client.post("/search", json={"query": "ship #urgent project:work"})
        assert [task["title"] for task in response.json()] == ["Ship release"]

    def test_suggest_uses_persisted_mode(self, test_db, app_client):
        """POST /suggest falls back to the stored mode."""
        create_task_db("id-1", "A", tags=["shopping"])

        assert app_client.post("/suggest", json={"input": "#sh"}).json() == ["#shopping"]

        app_client.put("/settings/mode", json={"mode": "create"})
        assert app_client.post("/suggest", json={"input": "Fix bug ur"}).json() == ["urgent", "#urgent"]

    def test_suggest_explicit_mode(self, app_client):
        """POST /suggest honours a mode in the request."""
        response = app_client.post("/suggest", json={"input": "pr", "mode": "search"})
        assert response.json() == ["priority", "project"]

    def test_apply_suggestion_keyword(self, app_client):
        """POST /apply-suggestion swaps date keywords."""
        response = app_client.post("/apply-suggestion", json={
            "input": "Lunch monday ",
            "suggestion": "tomorrow",
            "mode": "create"
        })
        assert response.json()["text"] == "Lunch tomorrow "

    def test_apply_filter_prefix_then_value(self, test_db, app_client):
        """A prefix then a value builds a full filter token."""
        create_project_db("Home Reno", "#000000")

        applied = app_client.post("/apply-suggestion", json={
            "input": "paint pro",
            "suggestion": "project",
            "mode": "search"
        }).json()
        assert applied["text"] == "paint project:"
        assert applied["pending_prefix"] == "project"
        assert applied["secondary_options"] == ["home reno"]

        response = app_client.post("/secondary-options", json={
            "input": applied["text"],
            "prefix": "project",
            "option": "home"
        })
        assert response.json() == {"text": "paint project:home "}

    def test_get_secondary_options(self, app_client):
        """GET /secondary-options lists values for a prefix."""
        assert app_client.get("/secondary-options/status").json() == ["completed", "incomplete"]
        assert app_client.get("/secondary-options/unknown").json() == []
