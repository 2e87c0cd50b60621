"""Decode a candidate JSON string into a ProjectPlan."""

from __future__ import annotations

from pydantic import ValidationError

from teamplan.errors import EmptyPlanError, MalformedPlanError
from teamplan.schemas import ProjectPlan


def parse_plan(candidate: str) -> ProjectPlan:
    """Decode `candidate` and require at least one task.

    Only the shape is checked. Duplicate titles, unknown assignees and
    dependencies that name missing (or the same) tasks all pass.

    Raises:
        MalformedPlanError: If the JSON is unparseable or has wrong types
        EmptyPlanError: If the plan decodes but has no tasks
    """
    try:
        plan = ProjectPlan.model_validate_json(candidate)
    except ValidationError as e:
        raise MalformedPlanError(f"Failed to parse project plan: {e}") from e

    if not plan.tasks:
        raise EmptyPlanError("No tasks generated in project plan")

    return plan
