from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
)
from pydantic.alias_generators import to_camel

from mapping.time_formatter import format_time


ProjectStatus = Literal["active", "completed", "archived"]
CategoryType = Literal["note", "task", "both"]

# Domain vocabulary shown to users
TaskPriority = Literal["Thấp", "Trung bình", "Cao", "Khẩn cấp"]
TaskStatus = Literal["Chưa bắt đầu", "Đang làm", "Hoàn thành", "Tạm dừng"]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TaskDraft(CamelModel):
    """A task suggested by the AI service, before it is persisted."""

    task_text: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("taskText", "task_text", "text"),
    )
    # Kept as sent by the AI; missing or unknown labels are handled by the priority mapper.
    priority: Optional[str] = None
    estimated_minutes: Optional[int] = Field(
        None,
        ge=0,
        validation_alias=AliasChoices(
            "estimatedMinutes",
            "estimatedTimeMinutes",
            "estimated_minutes",
            "estimated_time_minutes",
        ),
    )
    suggested_project: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("suggestedProject", "suggested_project", "project"),
    )
    suggested_topic: Optional[str] = Field(
        None,
        validation_alias=AliasChoices(
            "suggestedTopic", "suggested_topic", "topic", "category"
        ),
    )

    @field_validator("task_text")
    @classmethod
    def task_text_not_blank(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("taskText must not be blank")
        return v2

    def raw_labels(self) -> Dict[str, Any]:
        """Original AI labels, stored on the task for traceability."""
        return {
            "priority": self.priority,
            "estimatedMinutes": self.estimated_minutes,
            "suggestedProject": self.suggested_project,
            "suggestedTopic": self.suggested_topic,
        }


class ProjectCreate(CamelModel):
    owner_id: str
    name: str = Field(..., min_length=1)
    description: str = ""
    color: str = "#4A90E2"
    icon: str = "folder"
    status: ProjectStatus = "active"
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    ai_generated: bool = False

    @field_validator("name")
    @classmethod
    def name_trimmed(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("name must not be blank")
        return v2


class Project(ProjectCreate):
    id: str
    created_at: Optional[datetime] = None


class CategoryCreate(CamelModel):
    owner_id: str
    name: str = Field(..., min_length=1)
    color: str = "#808080"
    icon: str = "tag"
    type: CategoryType = "both"
    ai_generated: bool = False

    @field_validator("name")
    @classmethod
    def name_trimmed(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("name must not be blank")
        return v2


class Category(CategoryCreate):
    id: str
    created_at: Optional[datetime] = None


class TaskCreate(CamelModel):
    owner_id: str
    title: str = Field(..., min_length=1)
    description: str = ""
    priority: TaskPriority = "Trung bình"
    status: TaskStatus = "Chưa bắt đầu"
    project_id: Optional[str] = None
    category_id: Optional[str] = None
    estimated_minutes: Optional[int] = Field(None, ge=0)
    ai_generated: bool = False
    ai_metadata: Dict[str, Any] = Field(default_factory=dict)
    source_note_id: Optional[str] = None


class Task(TaskCreate):
    id: str
    created_at: Optional[datetime] = None

    @computed_field(alias="estimatedTimeLabel")
    @property
    def estimated_time_label(self) -> Optional[str]:
        if self.estimated_minutes is None:
            return None
        return format_time(self.estimated_minutes)


class EntityRef(CamelModel):
    id: str
    name: str


class ImportFailure(CamelModel):
    index: int
    task_text: str
    error: str


class ImportSummary(CamelModel):
    tasks_created: int = 0
    tasks_failed: int = 0
    projects_created: int = 0
    categories_created: int = 0
    new_projects: List[EntityRef] = Field(default_factory=list)
    new_categories: List[EntityRef] = Field(default_factory=list)
    failures: List[ImportFailure] = Field(default_factory=list)


class ImportResult(CamelModel):
    tasks: List[Task] = Field(default_factory=list)
    summary: ImportSummary = Field(default_factory=ImportSummary)
