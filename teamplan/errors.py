"""Exception hierarchy for the plan generation pipeline.

- GenerationError: the model server could not produce a response
    - GenerationConnectionError: unreachable or timed out
    - GenerationServerError: non-2xx status
    - GenerationDecodeError: body is not a generate envelope
- PlanError: the model responded but no usable plan came out of it
    - MalformedPlanError: candidate JSON is unparseable or has wrong types
    - EmptyPlanError: candidate decoded fine but holds zero tasks
"""

from __future__ import annotations


class TeamplanError(Exception):
    """Base class for all errors raised by teamplan."""


# =============================================================================
# Generation
# =============================================================================

class GenerationError(TeamplanError):
    """The model server call failed."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message)
        self.message = message
        self.detail = detail

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message}: {self.detail}"
        return self.message


class GenerationConnectionError(GenerationError):
    """Endpoint unreachable, connection dropped, or request timed out."""


class GenerationServerError(GenerationError):
    """Model server answered with a non-success status."""

    def __init__(self, message: str, status_code: int, detail: str | None = None):
        super().__init__(message, detail)
        self.status_code = status_code


class GenerationDecodeError(GenerationError):
    """Response body could not be read as a generate envelope."""


# =============================================================================
# Plan validation
# =============================================================================

class PlanError(TeamplanError):
    """Model output could not be turned into a usable plan."""


class MalformedPlanError(PlanError):
    """Candidate JSON failed to decode into the plan shape."""


class EmptyPlanError(PlanError):
    """Candidate decoded into a plan without any tasks."""
