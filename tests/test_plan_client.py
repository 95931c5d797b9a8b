from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from fitplanner.ai.client import (
    MAX_OUTPUT_TOKENS,
    PlanClient,
    PlanGenerationError,
    build_prompt,
    normalize_body,
)


def _gemini_payload(text: str) -> str:
    return json.dumps(
        {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]},
        indent=2,
    )


def test_generate_plan_posts_prompt_and_extracts_text() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, text=_gemini_payload('Monday: "Push"\nTuesday: Pull'))

    client = PlanClient("secret", transport=httpx.MockTransport(handler))

    text = asyncio.run(client.generate_plan("Build muscle", "Beginner", "3 hours"))

    assert text == 'Monday: "Push"\nTuesday: Pull'
    request = seen[0]
    assert request.method == "POST"
    assert request.url.params["key"] == "secret"
    assert request.url.path.endswith("gemini-1.5-flash:generateContent")
    body = json.loads(request.content)
    assert body["generationConfig"] == {"maxOutputTokens": MAX_OUTPUT_TOKENS, "temperature": 0.7}
    prompt = body["contents"][0]["parts"][0]["text"]
    assert "Goal: Build muscle" in prompt
    assert "Favorite exercises: None specified" in prompt


def test_non_200_raises_with_body() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(403, text='{"error": "API key not valid"}')

    client = PlanClient("bad", transport=httpx.MockTransport(handler))

    with pytest.raises(PlanGenerationError) as info:
        asyncio.run(client.generate_plan("Lose weight", "Beginner", "2 hours"))
    assert "API key not valid" in str(info.value)


def test_transport_error_is_wrapped() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = PlanClient("secret", transport=httpx.MockTransport(handler))

    with pytest.raises(PlanGenerationError):
        asyncio.run(client.generate_plan("Run a 10k", "Intermediate", "4 hours"))


def test_missing_api_key_fails_before_request() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    client = PlanClient(None, transport=httpx.MockTransport(handler))

    assert not client.configured
    with pytest.raises(PlanGenerationError):
        asyncio.run(client.generate_plan("Flexibility", "Beginner", "1 hour"))


def test_build_prompt_includes_optional_fields() -> None:
    prompt = build_prompt("Strength", "Advanced", "6 hours", "Deadlift", "Shoulder injury")

    assert "Favorite exercises: Deadlift" in prompt
    assert "Special conditions: Shoulder injury" in prompt
    assert "Special conditions: None" in build_prompt("a", "b", "c", "", "")


def test_normalize_body_joins_pretty_printed_lines() -> None:
    assert normalize_body('{\n  "a": [\n    {"b": 1}\n  ]\n}') == '{"a": [{"b": 1}]}'
