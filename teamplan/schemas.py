"""Pydantic schemas for all service I/O contracts.

These schemas define the strict contracts between:
- API endpoints and clients
- The model server wire format
- Model output and the structured project plan
"""

from __future__ import annotations

import re
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# Enums
# =============================================================================

class TaskStatus(str, Enum):
    """Status of a stored task."""
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


# =============================================================================
# Plan Schemas
# =============================================================================

class PlanRequest(BaseModel):
    """Input from user to generate a project plan."""
    requirements: str = Field(..., description="Free-text project requirements")
    employees: list[str] = Field(default_factory=list, description="Display names of available team members")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "requirements": "Build a login page",
                "employees": ["Alice", "Bob"],
            }
        }
    )


class GeneratedTask(BaseModel):
    """Single task proposed by the model."""
    title: str = Field(..., min_length=1, description="Task name")
    description: str = Field(default="", description="Detailed description")
    duration: str = Field(default="", description="Free-text duration estimate")
    assignees: list[str] = Field(default_factory=list, description="Names of assigned team members")
    dependencies: list[str] = Field(default_factory=list, description="Titles of tasks this one depends on")

    @field_validator("description", "duration", mode="before")
    @classmethod
    def _null_text(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("assignees", "dependencies", mode="before")
    @classmethod
    def _null_list(cls, value: Any) -> Any:
        return [] if value is None else value


class ProjectPlan(BaseModel):
    """Structured plan recovered from model output."""
    tasks: list[GeneratedTask] = Field(default_factory=list, description="Ordered list of tasks")
    timeline: str = Field(default="", description="Total project timeline estimate")

    @field_validator("tasks", mode="before")
    @classmethod
    def _null_tasks(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("timeline", mode="before")
    @classmethod
    def _null_timeline(cls, value: Any) -> Any:
        return "" if value is None else value

    def to_markdown(self) -> str:
        """Render plan as markdown."""
        md = "# Project Plan\n\n"
        for i, task in enumerate(self.tasks, 1):
            md += f"## {i}. {task.title}\n"
            if task.description:
                md += f"{task.description}\n\n"
            if task.duration:
                md += f"- **Duration**: {task.duration}\n"
            if task.assignees:
                md += f"- **Assignees**: {', '.join(task.assignees)}\n"
            if task.dependencies:
                md += f"- **Depends on**: {', '.join(task.dependencies)}\n"
            md += "\n"
        md += f"## Timeline\n{self.timeline}\n"
        return md


# =============================================================================
# Model Server Schemas
# =============================================================================

class GenerateRequest(BaseModel):
    """Body of a single-shot completion request."""
    model: str
    prompt: str
    stream: bool = False
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_tokens: int = Field(default=2048, gt=0)
    options: dict[str, Any] = Field(default_factory=dict)


_EXCESS_FRACTION = re.compile(r"(\.\d{6})\d+")


class RawModelResponse(BaseModel):
    """Response envelope from the model server."""
    model: str = ""
    content: str = Field(..., alias="response")
    done: bool
    created_at: datetime | None = None

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("created_at", mode="before")
    @classmethod
    def _trim_nanoseconds(cls, value: Any) -> Any:
        # Ollama reports nanosecond precision; datetime holds microseconds.
        if isinstance(value, str):
            return _EXCESS_FRACTION.sub(r"\1", value)
        return value


# =============================================================================
# Employee Schemas
# =============================================================================

class EmployeeCreate(BaseModel):
    """API request to create an employee."""
    name: str = Field(..., min_length=1)


class EmployeeResponse(BaseModel):
    """API response for a single employee."""
    id: int
    name: str


class TaskSummary(BaseModel):
    """Task as listed under its assignee."""
    id: int
    title: str
    status: TaskStatus


class EmployeeTasksResponse(BaseModel):
    """API response for an employee and the tasks assigned to them."""
    id: int
    name: str
    tasks: list[TaskSummary] = Field(default_factory=list)


class EmployeeProjectRequest(BaseModel):
    """API request to add or remove a project member."""
    employee_id: int
    project_id: int


class AssignTaskRequest(BaseModel):
    """API request to assign a task to an employee."""
    task_id: int
    employee_id: int


class CompleteTaskRequest(BaseModel):
    """API request to mark a task as completed."""
    task_id: int


# =============================================================================
# Project Schemas
# =============================================================================

class ProjectCreate(BaseModel):
    """API request to create or replace a project."""
    name: str = Field(..., min_length=1)
    description: str = Field(default="")
    lead_id: int | None = Field(default=None, description="Employee leading the project")


class ProjectResponse(BaseModel):
    """API response for a single project."""
    id: int
    name: str
    description: str
    lead_id: int | None = None
    created_at: datetime


class TaskCreate(BaseModel):
    """API request to create a task inside a project."""
    title: str = Field(..., min_length=1)
    description: str = Field(default="")
    assigned_to: int | None = None


class TaskResponse(BaseModel):
    """API response for a single stored task."""
    id: int
    title: str
    description: str
    status: TaskStatus
    project_id: int | None = None
    assigned_to: int | None = None
    created_at: datetime
