from contextlib import asynccontextmanager
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
import uuid
import os
import logging
from dotenv import load_dotenv

from models import (
    AppliedSuggestion,
    ApplySuggestionRequest,
    Folder,
    FolderCreate,
    ModeUpdate,
    ParseOutcome,
    ParseRequest,
    Project,
    ProjectCreate,
    QueryRequest,
    SearchFilters,
    SecondaryOptionRequest,
    Subtask,
    SubtaskToggle,
    SuggestRequest,
    Task,
    TaskCreate,
    TaskFromText,
    TaskUpdate,
)
from database import (
    init_db,
    get_all_tasks,
    create_task_db,
    update_task_db,
    delete_task_db,
    toggle_subtask_db,
    get_all_tags,
    get_all_projects,
    create_project_db,
    delete_project_db,
    get_all_folders,
    create_folder_db,
    delete_folder_db,
    get_searchbar_mode,
    set_searchbar_mode,
)
from filter_parser import parse_filters
from suggestions import apply_secondary_option, apply_suggestion, secondary_options, suggest
from task_filter import filter_tasks
from task_parser import parse_task

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(_app: FastAPI):
    # Startup
    init_db()
    yield
    # Shutdown (nothing to do)

app = FastAPI(lifespan=lifespan)

CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",") if origin.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Tasks

@app.get("/tasks")
def get_tasks() -> list[Task]:
    return get_all_tasks()


@app.post("/tasks")
def create_task(task_data: TaskCreate) -> Task:
    return create_task_db(
        str(uuid.uuid4()),
        task_data.title,
        task_data.description,
        task_data.due_date,
        task_data.priority,
        task_data.project_id,
        task_data.tags,
        task_data.subtasks
    )


@app.post("/tasks/from-text")
def create_task_from_text(request: TaskFromText) -> Task:
    """Create a task from free-form text, e.g. "remind me to call mom tomorrow at 5pm"."""
    draft = parse_task(request.input).draft
    if not draft.clean_title:
        raise HTTPException(status_code=422, detail="No task title left after parsing")
    return create_task_db(
        str(uuid.uuid4()),
        draft.clean_title,
        request.description,
        draft.due_date,
        draft.priority or "medium",
        request.project_id,
        request.tags
    )


@app.patch("/tasks/{task_id}")
def update_task(task_id: str, task_data: TaskUpdate) -> Task:
    result = update_task_db(task_id, **task_data.model_dump(exclude_unset=True))
    if not result:
        raise HTTPException(status_code=404, detail="Task not found")
    return result


@app.delete("/tasks/{task_id}")
def delete_task(task_id: str) -> dict:
    if not delete_task_db(task_id):
        raise HTTPException(status_code=404, detail="Task not found")
    return {"status": "deleted"}


@app.patch("/subtasks/{subtask_id}")
def toggle_subtask(subtask_id: str, toggle: SubtaskToggle) -> Subtask:
    result = toggle_subtask_db(subtask_id, toggle.completed)
    if not result:
        raise HTTPException(status_code=404, detail="Subtask not found")
    return result


@app.get("/tags")
def get_tags() -> list[str]:
    return get_all_tags()


# Projects and folders

@app.get("/projects")
def get_projects() -> list[Project]:
    return get_all_projects()


@app.post("/projects")
def create_project(project_data: ProjectCreate) -> Project:
    return create_project_db(project_data.name, project_data.color, project_data.description, project_data.folder_id)


@app.delete("/projects/{project_id}")
def delete_project(project_id: int) -> dict:
    if not delete_project_db(project_id):
        raise HTTPException(status_code=404, detail="Project not found")
    return {"status": "deleted"}


@app.get("/folders")
def get_folders() -> list[Folder]:
    return get_all_folders()


@app.post("/folders")
def create_folder(folder_data: FolderCreate) -> Folder:
    return create_folder_db(folder_data.name, folder_data.color, folder_data.description)


@app.delete("/folders/{folder_id}")
def delete_folder(folder_id: int) -> dict:
    if not delete_folder_db(folder_id):
        raise HTTPException(status_code=404, detail="Folder not found")
    return {"status": "deleted"}


# Search bar mode

@app.get("/settings/mode")
def get_mode() -> dict:
    return {"mode": get_searchbar_mode()}


@app.put("/settings/mode")
def update_mode(mode_update: ModeUpdate) -> dict:
    set_searchbar_mode(mode_update.mode)
    return {"mode": mode_update.mode}


# Text input: parsing, filtering and suggestions

@app.post("/parse")
def parse(request: ParseRequest) -> ParseOutcome:
    """Preview what create mode would make of the input."""
    return parse_task(request.input)


@app.post("/filters")
def filters(request: QueryRequest) -> SearchFilters:
    return parse_filters(request.query)


@app.post("/search")
def search(request: QueryRequest) -> list[Task]:
    """Stored tasks matching a search-mode query, by due date."""
    return filter_tasks(get_all_tasks(), parse_filters(request.query), get_all_projects())


@app.post("/suggest")
def suggest_completions(request: SuggestRequest) -> list[str]:
    mode = request.mode or get_searchbar_mode()
    project_names = [project.name for project in get_all_projects()]
    return suggest(request.input, mode, get_all_tags(), project_names)


@app.post("/apply-suggestion")
def apply_suggestion_endpoint(request: ApplySuggestionRequest) -> AppliedSuggestion:
    mode = request.mode or get_searchbar_mode()
    project_names = [project.name for project in get_all_projects()] if mode == "search" else []
    return apply_suggestion(request.input, request.suggestion, mode, project_names)


@app.get("/secondary-options/{prefix}")
def get_secondary_options(prefix: str) -> list[str]:
    project_names = [project.name for project in get_all_projects()] if prefix == "project" else []
    return secondary_options(prefix, project_names)


@app.post("/secondary-options")
def apply_secondary(request: SecondaryOptionRequest) -> dict:
    return {"text": apply_secondary_option(request.input, request.prefix, request.option)}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
