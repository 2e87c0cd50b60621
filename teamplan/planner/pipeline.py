"""Project plan generation pipeline.

Flow:
PlanRequest → format_plan_prompt → LLMAdapter.generate → extract_json → parse_plan → ProjectPlan

Straight line: no retries, no partial results. The first failing stage
raises and the caller gets nothing else.
"""

from __future__ import annotations

import logging

from teamplan.errors import GenerationError, PlanError
from teamplan.llm.base import LLMAdapter
from teamplan.planner.prompts import format_plan_prompt
from teamplan.planner.recovery import extract_json
from teamplan.planner.validator import parse_plan
from teamplan.schemas import PlanRequest, ProjectPlan


logger = logging.getLogger(__name__)


async def generate_project_plan(
    request: PlanRequest,
    client: LLMAdapter,
    model: str | None = None,
) -> ProjectPlan:
    """Generate a structured project plan for `request`.

    Args:
        request: Requirements and team roster
        client: Adapter for the model server
        model: Model override (client default if None)

    Returns:
        Validated plan with at least one task

    Raises:
        GenerationError: If the model server call fails
        MalformedPlanError: If the recovered JSON does not decode as a plan
        EmptyPlanError: If the plan has no tasks
    """
    prompt = format_plan_prompt(request.requirements, request.employees)
    logger.info(
        f"Generating plan for {len(request.employees)} employees via {client.provider_name}"
    )

    try:
        response = await client.generate(prompt, model=model)
    except GenerationError as e:
        logger.error(f"Plan generation failed: {e}")
        raise

    if not response.done:
        logger.warning(f"Model {response.model} reported an incomplete response")

    candidate = extract_json(response.content)
    logger.debug(f"Recovered candidate JSON ({len(candidate)} chars)")

    try:
        plan = parse_plan(candidate)
    except PlanError as e:
        logger.warning(f"Rejected model output: {e}")
        raise

    logger.info(f"Generated plan with {len(plan.tasks)} tasks")
    return plan
