"""Prompt template for project plan generation.

SECURITY NOTE: requirements and employee names are interpolated into the
template verbatim. A crafted `requirements` value can therefore override the
instructions below (prompt injection). Escaping or delimiting user text
changes what the model sees, so it is left as-is until that behaviour is
decided on.
"""

from __future__ import annotations

from typing import Sequence

# =============================================================================
# Plan Prompt
# =============================================================================

PLAN_INSTRUCTIONS = """Format the response as JSON with this structure:
    {
        "tasks": [
            {
                "title": "Task name",
                "description": "Detailed description",
                "duration": "Estimated duration",
                "assignees": ["Team member names"],
                "dependencies": ["Dependent task titles"]
            }
        ],
        "timeline": "Total project timeline estimate"
    }
    
    Consider dependencies between tasks and team member expertise."""


PLAN_PROMPT = """Create a detailed project plan based on these requirements:
    {requirements}
    
    Available team members: {employees}
    
    {instructions}"""


def format_plan_prompt(requirements: str, employee_names: Sequence[str]) -> str:
    """Format the plan generation prompt."""
    return PLAN_PROMPT.format(
        requirements=requirements,
        employees=", ".join(employee_names),
        instructions=PLAN_INSTRUCTIONS,
    )
