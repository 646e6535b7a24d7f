from pydantic import BaseModel, Field
from typing import Literal, Optional

Priority = Literal["low", "medium", "high"]
Mode = Literal["search", "create"]
Status = Literal["completed", "incomplete"]
DueBucket = Literal["today", "overdue"]
SuggestionCategory = Literal["tag", "priority", "time", "date", "keyword", "filter-prefix"]


# Text core values

class ParsedTaskDraft(BaseModel):
    clean_title: str
    due_date: Optional[str] = None  # ISO format: YYYY-MM-DD
    has_time_specified: bool = False
    due_time: Optional[str] = None  # HH:MM, only set together with due_date
    priority: Optional[Priority] = None
    tags: Optional[list[str]] = None

class ParseOutcome(BaseModel):
    draft: ParsedTaskDraft
    suggestions: list[str] = Field(default_factory=list)

class SearchFilters(BaseModel):
    text: str = ""
    tags: list[str] = Field(default_factory=list)
    priority: Optional[Priority] = None
    project_name: Optional[str] = None
    status: Optional[Status] = None
    due: Optional[DueBucket] = None

class AppliedSuggestion(BaseModel):
    text: str
    pending_prefix: Optional[str] = None  # set when a filter prefix opens its value list
    secondary_options: list[str] = Field(default_factory=list)


# Store records

class Subtask(BaseModel):
    id: str
    text: str
    completed: bool = False

class SubtaskToggle(BaseModel):
    completed: bool

class Task(BaseModel):
    id: str
    title: str
    description: str = ""
    due_date: Optional[str] = None  # ISO format: YYYY-MM-DD
    priority: Priority = "medium"
    completed: bool = False
    project_id: Optional[int] = None
    tags: list[str] = Field(default_factory=list)
    subtasks: list[Subtask] = Field(default_factory=list)
    created_at: str  # ISO format datetime string
    updated_at: str

class TaskCreate(BaseModel):
    title: str
    description: str = ""
    due_date: Optional[str] = None
    priority: Priority = "medium"
    project_id: Optional[int] = None
    tags: list[str] = Field(default_factory=list)
    subtasks: list[str] = Field(default_factory=list)  # texts; each becomes an open subtask

class TaskUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[str] = None
    priority: Optional[Priority] = None
    completed: Optional[bool] = None
    project_id: Optional[int] = None
    tags: Optional[list[str]] = None
    subtasks: Optional[list[str]] = None  # replaces the whole list

class Folder(BaseModel):
    id: int
    name: str
    color: str
    description: Optional[str] = None

class FolderCreate(BaseModel):
    name: str
    color: str = "#6b7280"
    description: Optional[str] = None

class Project(BaseModel):
    id: int
    name: str
    color: str
    description: Optional[str] = None
    folder_id: Optional[int] = None

class ProjectCreate(BaseModel):
    name: str
    color: str = "#3b82f6"
    description: Optional[str] = None
    folder_id: Optional[int] = None


# Request bodies

class ParseRequest(BaseModel):
    input: str

class TaskFromText(BaseModel):
    input: str
    description: str = ""
    project_id: Optional[int] = None
    tags: list[str] = Field(default_factory=list)

class QueryRequest(BaseModel):
    query: str

class SuggestRequest(BaseModel):
    input: str
    mode: Optional[Mode] = None  # falls back to the persisted mode

class ApplySuggestionRequest(BaseModel):
    input: str
    suggestion: str
    mode: Optional[Mode] = None

class SecondaryOptionRequest(BaseModel):
    input: str
    prefix: str
    option: str

class ModeUpdate(BaseModel):
    mode: Mode
