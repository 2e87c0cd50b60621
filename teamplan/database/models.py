"""SQLModel database tables.

Tables:
- Employee: team members that plans and tasks refer to
- Project: projects, each optionally led by an employee
- Task: work items, optionally inside a project and assigned to an employee
- EmployeeProject: project membership
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Column, ForeignKey, Integer, Text
from sqlmodel import Field, SQLModel

from teamplan.schemas import TaskStatus


# =============================================================================
# Employee Model
# =============================================================================

class Employee(SQLModel, table=True):
    """A team member."""

    __tablename__ = "employees"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(index=True, description="Display name")


# =============================================================================
# Project Model
# =============================================================================

class Project(SQLModel, table=True):
    """A project, optionally led by an employee."""

    __tablename__ = "projects"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(description="Project name")
    description: str = Field(default="", sa_column=Column(Text, nullable=False, default=""))
    lead_id: int | None = Field(
        default=None,
        sa_column=Column(Integer, ForeignKey("employees.id", ondelete="SET NULL"), nullable=True),
    )
    created_at: datetime = Field(default_factory=datetime.utcnow)


# =============================================================================
# Task Model
# =============================================================================

class Task(SQLModel, table=True):
    """A unit of work."""

    __tablename__ = "tasks"

    id: int | None = Field(default=None, primary_key=True)
    title: str = Field(description="Task title")
    description: str = Field(default="", sa_column=Column(Text, nullable=False, default=""))
    status: str = Field(default=TaskStatus.PENDING.value, index=True)  # Use TaskStatus enum values
    project_id: int | None = Field(
        default=None,
        sa_column=Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=True, index=True),
    )
    assigned_to: int | None = Field(
        default=None,
        sa_column=Column(Integer, ForeignKey("employees.id", ondelete="SET NULL"), nullable=True, index=True),
    )
    created_at: datetime = Field(default_factory=datetime.utcnow)


# =============================================================================
# Membership Model
# =============================================================================

class EmployeeProject(SQLModel, table=True):
    """Links an employee to a project they work on."""

    __tablename__ = "employee_projects"

    employee_id: int = Field(
        sa_column=Column(Integer, ForeignKey("employees.id", ondelete="CASCADE"), primary_key=True),
    )
    project_id: int = Field(
        sa_column=Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), primary_key=True),
    )
