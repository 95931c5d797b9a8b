from __future__ import annotations

import json

import pytest

from fitplanner.ai.extractor import (
    EMPTY_RESPONSE,
    FAILED_PREFIX,
    extract_plan_text,
    unescape_json_text,
)


def _primary_response(text: str) -> str:
    escaped = json.dumps(text)[1:-1]
    return '{"candidates": [{"content": {"parts": [{"text": "' + escaped + '"}]}}]}'


@pytest.mark.parametrize(
    "text",
    [
        "Monday: Squat 3x10\nTuesday: Rest",
        'Coach says "go hard"\nthen rest',
        "Path C:\\plans\\week1 and a literal \\n marker",
        'Ends with a quote "',
        "Line one\n\n\"Quoted\" \\ backslash\n",
    ],
)
def test_primary_shape_round_trip(text: str) -> None:
    assert extract_plan_text(_primary_response(text)) == text


def test_empty_input_returns_sentinel() -> None:
    assert extract_plan_text("") == EMPTY_RESPONSE
    assert extract_plan_text(None) == EMPTY_RESPONSE


def test_primary_marker_on_truncated_payload() -> None:
    raw = '{"candidates": [{"content": {"parts": [{"text": "Day 1\\nSquat"}]}}'

    assert extract_plan_text(raw) == "Day 1\nSquat"


def test_shallow_parts_shape_is_extracted() -> None:
    assert extract_plan_text('{"parts": [{"text": "Hello"}]}') == "Hello"


def test_shallow_parts_marker_on_malformed_payload() -> None:
    raw = 'garbage "parts": [{"text": "Hello\\nWorld"} trailing'

    assert extract_plan_text(raw) == "Hello\nWorld"


def test_any_text_field_honors_escaped_quotes() -> None:
    raw = '{"message": {"text": "He said \\"hi\\" today", "extra": '

    assert extract_plan_text(raw) == 'He said "hi" today'


def test_content_object_fallback_on_compact_payload() -> None:
    raw = '{"candidates":[{"content":{"role":"model","parts":[{"text":"Compact plan"}]}}'

    assert extract_plan_text(raw) == "Compact plan"


def test_unrecognized_payload_keeps_raw_input() -> None:
    result = extract_plan_text("not json at all")

    assert result.startswith(FAILED_PREFIX)
    assert "not json at all" in result


def test_valid_json_without_text_is_reported() -> None:
    raw = '{"error": {"code": 400, "message": "bad request"}}'

    assert extract_plan_text(raw) == FAILED_PREFIX + raw


def test_unescape_is_single_pass() -> None:
    assert unescape_json_text("a\\\\nb") == "a\\nb"
    assert unescape_json_text("a\\nb") == "a\nb"
    assert unescape_json_text('\\"q\\"') == '"q"'
    assert unescape_json_text("caf\\u00e9") == "café"
    assert unescape_json_text("keep \\x as is") == "keep \\x as is"


def test_deeply_nested_payload_keeps_raw_input() -> None:
    raw = "[" * 100000

    assert extract_plan_text(raw) == FAILED_PREFIX + raw


def test_deeply_nested_payload_still_uses_text_fallback() -> None:
    raw = "[" * 100000 + '{"text": "Rest day"}'

    assert extract_plan_text(raw) == "Rest day"
