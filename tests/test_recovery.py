import json

import pytest

from teamplan.errors import MalformedPlanError
from teamplan.planner.recovery import extract_json
from teamplan.planner.validator import parse_plan


def test_fenced_json_is_unwrapped():
    assert extract_json('```json\n{"a":1}\n```') == '{"a":1}'


def test_prose_around_object_is_dropped(login_page_output):
    candidate = extract_json(login_page_output)

    assert candidate.startswith('{"tasks"')
    assert candidate.endswith('"timeline":"1 week"}')
    assert json.loads(candidate)["timeline"] == "1 week"


def test_balanced_span_is_returned_brace_inclusive():
    raw = 'Here is the plan: {"tasks": [], "timeline": "2 weeks"} Hope this helps!'

    assert extract_json(raw) == '{"tasks": [], "timeline": "2 weeks"}'


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "I cannot help with that.",
        "only an opening { brace",
        "only a closing } brace",
        "} reversed {",
    ],
)
def test_missing_object_falls_back_to_empty(raw):
    assert extract_json(raw) == "{}"


def test_newlines_are_removed():
    raw = '{\n  "tasks": [],\n  "timeline": "soon"\n}'

    assert extract_json(raw) == '{  "tasks": [],  "timeline": "soon"}'


def test_surrounding_whitespace_is_trimmed():
    assert extract_json('   {"a": 1}   ') == '{"a": 1}'


def test_span_runs_from_first_open_to_last_close():
    # Not JSON-aware: stray braces in prose widen the span.
    raw = 'Use {curly} braces. {"a": 1}'

    assert extract_json(raw) == '{curly} braces. {"a": 1}'


def test_backslashes_are_stripped_from_content():
    raw = r'{"tasks": [{"title": "Path C:\temp"}]}'

    assert extract_json(raw) == '{"tasks": [{"title": "Path C:temp"}]}'


def test_escaped_quotes_break_after_cleanup():
    # Known limitation: removing backslashes turns \" into a bare quote.
    raw = r'{"tasks": [{"title": "Say \"hi\""}], "timeline": "1d"}'
    candidate = extract_json(raw)

    assert candidate == '{"tasks": [{"title": "Say "hi""}], "timeline": "1d"}'
    with pytest.raises(MalformedPlanError):
        parse_plan(candidate)


def test_escaped_newline_sequences_lose_their_backslash():
    raw = r'{"tasks": [{"title": "Write docs", "description": "line one\nline two"}]}'

    assert '"line onenline two"' in extract_json(raw)
