"""Best-effort recovery of a JSON object from free-text model output.

Models tend to wrap their JSON in prose or markdown fences and to leak
escape sequences. This is a string heuristic, not a parser: it keeps the
outermost `{...}` span and scrubs it. Known limitation: every newline and
every backslash is dropped, so string values that legitimately contain
them (escaped quotes, Windows paths, multi-line text) come out altered or
no longer parse.
"""

from __future__ import annotations

import logging


logger = logging.getLogger(__name__)

EMPTY_OBJECT = "{}"
FENCE_OPEN = "```json"
FENCE_CLOSE = "```"


def extract_json(raw_text: str) -> str:
    """Return the candidate JSON object embedded in `raw_text`.

    Falls back to the empty object literal when no `{...}` span exists,
    leaving the decision to the plan validator.
    """
    start = raw_text.find("{")
    end = raw_text.rfind("}")

    if start == -1 or end == -1 or end < start:
        logger.debug("No JSON object found in model output, using empty object")
        return EMPTY_OBJECT

    candidate = raw_text[start:end + 1]

    # Common formatting artifacts
    candidate = candidate.replace("\n", "")
    candidate = candidate.replace("\\", "")
    candidate = candidate.removeprefix(FENCE_OPEN)
    candidate = candidate.removesuffix(FENCE_CLOSE)

    return candidate.strip()
