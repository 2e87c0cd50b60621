"""FastAPI routes for the Teamplan API.

Endpoints:
- GET  /health                        - Service and model server status
- POST /project/plan                  - Generate a project plan from requirements

Employees:
- POST /employees                     - Create employee
- GET  /employees/tasks               - Employees with their assigned tasks
- POST /employees/assign-project      - Add employee to project
- POST /employees/remove-from-project - Remove employee from project
- POST /employees/assign-task         - Assign task to employee
- POST /employees/complete-task       - Mark task completed

Projects:
- POST   /projects                    - Create project
- GET    /projects                    - List projects
- GET    /projects/{id}               - Get project
- PUT    /projects/{id}               - Update project
- DELETE /projects/{id}               - Delete project
- GET    /projects/{id}/tasks         - List project tasks
- POST   /projects/{id}/tasks         - Create task in project
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from teamplan.config import get_settings
from teamplan.database.models import Employee, EmployeeProject, Project, Task
from teamplan.database.session import get_db
from teamplan.errors import EmptyPlanError, GenerationError, MalformedPlanError
from teamplan.llm.base import LLMAdapter
from teamplan.planner.pipeline import generate_project_plan
from teamplan.schemas import (
    AssignTaskRequest,
    CompleteTaskRequest,
    EmployeeCreate,
    EmployeeProjectRequest,
    EmployeeResponse,
    EmployeeTasksResponse,
    PlanRequest,
    ProjectCreate,
    ProjectPlan,
    ProjectResponse,
    TaskCreate,
    TaskResponse,
    TaskStatus,
    TaskSummary,
)


logger = logging.getLogger(__name__)
router = APIRouter()

settings = get_settings()


def get_generation_client(request: Request) -> LLMAdapter:
    """Dependency returning the adapter created at startup."""
    return request.app.state.generation_client


async def _get_or_404(db: AsyncSession, model: type, key: Any, detail: str):
    obj = await db.get(model, key)
    if obj is None:
        raise HTTPException(status_code=404, detail=detail)
    return obj


# =============================================================================
# Health Check
# =============================================================================

@router.get("/health")
async def health(client: LLMAdapter = Depends(get_generation_client)) -> dict:
    """Health check endpoint."""
    return {
        "status": "ok",
        "version": settings.app_version,
        "environment": settings.environment,
        "model_server": "ok" if await client.health_check() else "unreachable",
    }


# =============================================================================
# Plan Generation
# =============================================================================

@router.post("/project/plan", response_model=ProjectPlan)
async def create_project_plan(
    request: PlanRequest,
    client: LLMAdapter = Depends(get_generation_client),
) -> ProjectPlan:
    """Generate a project plan for the given requirements and team.

    Nothing is persisted; the plan is returned as-is.
    """
    try:
        return await generate_project_plan(request, client)
    except GenerationError:
        raise HTTPException(status_code=500, detail="Failed to generate project plan")
    except MalformedPlanError:
        raise HTTPException(status_code=500, detail="Failed to parse project plan")
    except EmptyPlanError:
        raise HTTPException(status_code=500, detail="No tasks generated in project plan")


# =============================================================================
# Employees Endpoints
# =============================================================================

@router.post("/employees", response_model=EmployeeResponse)
async def create_employee(
    request: EmployeeCreate,
    db: AsyncSession = Depends(get_db),
) -> EmployeeResponse:
    """Create a new employee."""
    employee = Employee(name=request.name)
    db.add(employee)
    await db.commit()
    await db.refresh(employee)

    logger.info(f"Created employee {employee.id}")
    return EmployeeResponse.model_validate(employee, from_attributes=True)


@router.get("/employees/tasks", response_model=list[EmployeeTasksResponse])
async def get_employee_tasks(
    db: AsyncSession = Depends(get_db),
) -> list[EmployeeTasksResponse]:
    """List every employee with the tasks assigned to them."""
    result = await db.execute(
        select(Employee, Task)
        .join(Task, Task.assigned_to == Employee.id, isouter=True)
        .order_by(Employee.id, Task.id)
    )

    employees: dict[int, EmployeeTasksResponse] = {}
    for employee, task in result.all():
        entry = employees.get(employee.id)
        if entry is None:
            entry = EmployeeTasksResponse(id=employee.id, name=employee.name)
            employees[employee.id] = entry
        if task is not None:
            entry.tasks.append(
                TaskSummary(id=task.id, title=task.title, status=TaskStatus(task.status))
            )

    return list(employees.values())


@router.post("/employees/assign-project")
async def assign_to_project(
    request: EmployeeProjectRequest,
    db: AsyncSession = Depends(get_db),
) -> dict:
    """Add an employee to a project. Repeating the call is a no-op."""
    await _get_or_404(db, Employee, request.employee_id, "Employee not found")
    await _get_or_404(db, Project, request.project_id, "Project not found")

    link = await db.get(EmployeeProject, (request.employee_id, request.project_id))
    if link is None:
        db.add(EmployeeProject(employee_id=request.employee_id, project_id=request.project_id))
        await db.commit()

    return {
        "status": "assigned",
        "employee_id": request.employee_id,
        "project_id": request.project_id,
    }


@router.post("/employees/remove-from-project")
async def remove_from_project(
    request: EmployeeProjectRequest,
    db: AsyncSession = Depends(get_db),
) -> dict:
    """Remove an employee from a project."""
    link = await _get_or_404(
        db,
        EmployeeProject,
        (request.employee_id, request.project_id),
        "Employee not assigned to project",
    )
    await db.delete(link)
    await db.commit()

    return {
        "status": "removed",
        "employee_id": request.employee_id,
        "project_id": request.project_id,
    }


@router.post("/employees/assign-task")
async def assign_task(
    request: AssignTaskRequest,
    db: AsyncSession = Depends(get_db),
) -> dict:
    """Assign a task to an employee."""
    task = await _get_or_404(db, Task, request.task_id, "Task not found")
    await _get_or_404(db, Employee, request.employee_id, "Employee not found")

    task.assigned_to = request.employee_id
    await db.commit()

    return {"status": "assigned", "task_id": task.id, "employee_id": request.employee_id}


@router.post("/employees/complete-task")
async def complete_task(
    request: CompleteTaskRequest,
    db: AsyncSession = Depends(get_db),
) -> dict:
    """Mark a task as completed."""
    task = await _get_or_404(db, Task, request.task_id, "Task not found")

    task.status = TaskStatus.COMPLETED.value
    await db.commit()

    return {"status": "completed", "task_id": task.id}


# =============================================================================
# Projects Endpoints
# =============================================================================

@router.post("/projects", response_model=ProjectResponse)
async def create_project(
    request: ProjectCreate,
    db: AsyncSession = Depends(get_db),
) -> ProjectResponse:
    """Create a new project."""
    if request.lead_id is not None:
        await _get_or_404(db, Employee, request.lead_id, "Employee not found")

    project = Project(
        name=request.name,
        description=request.description,
        lead_id=request.lead_id,
    )
    db.add(project)
    await db.commit()
    await db.refresh(project)

    logger.info(f"Created project {project.id}")
    return ProjectResponse.model_validate(project, from_attributes=True)


@router.get("/projects", response_model=list[ProjectResponse])
async def list_projects(
    db: AsyncSession = Depends(get_db),
) -> list[ProjectResponse]:
    """List all projects."""
    result = await db.execute(select(Project).order_by(Project.id))
    return [
        ProjectResponse.model_validate(project, from_attributes=True)
        for project in result.scalars().all()
    ]


@router.get("/projects/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: int,
    db: AsyncSession = Depends(get_db),
) -> ProjectResponse:
    """Get project by ID."""
    project = await _get_or_404(db, Project, project_id, "Project not found")
    return ProjectResponse.model_validate(project, from_attributes=True)


@router.put("/projects/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: int,
    request: ProjectCreate,
    db: AsyncSession = Depends(get_db),
) -> ProjectResponse:
    """Replace a project's name, description and lead."""
    project = await _get_or_404(db, Project, project_id, "Project not found")
    if request.lead_id is not None:
        await _get_or_404(db, Employee, request.lead_id, "Employee not found")

    project.name = request.name
    project.description = request.description
    project.lead_id = request.lead_id
    await db.commit()
    await db.refresh(project)

    return ProjectResponse.model_validate(project, from_attributes=True)


@router.delete("/projects/{project_id}")
async def delete_project(
    project_id: int,
    db: AsyncSession = Depends(get_db),
) -> dict:
    """Delete a project."""
    project = await _get_or_404(db, Project, project_id, "Project not found")
    await db.delete(project)
    await db.commit()

    logger.info(f"Deleted project {project_id}")
    return {"status": "deleted", "project_id": project_id}


@router.get("/projects/{project_id}/tasks", response_model=list[TaskResponse])
async def get_project_tasks(
    project_id: int,
    db: AsyncSession = Depends(get_db),
) -> list[TaskResponse]:
    """List the tasks of a project."""
    await _get_or_404(db, Project, project_id, "Project not found")

    result = await db.execute(
        select(Task).where(Task.project_id == project_id).order_by(Task.id)
    )
    return [
        TaskResponse.model_validate(task, from_attributes=True)
        for task in result.scalars().all()
    ]


@router.post("/projects/{project_id}/tasks", response_model=TaskResponse)
async def create_project_task(
    project_id: int,
    request: TaskCreate,
    db: AsyncSession = Depends(get_db),
) -> TaskResponse:
    """Create a task inside a project."""
    await _get_or_404(db, Project, project_id, "Project not found")
    if request.assigned_to is not None:
        await _get_or_404(db, Employee, request.assigned_to, "Employee not found")

    task = Task(
        title=request.title,
        description=request.description,
        project_id=project_id,
        assigned_to=request.assigned_to,
    )
    db.add(task)
    await db.commit()
    await db.refresh(task)

    return TaskResponse.model_validate(task, from_attributes=True)
