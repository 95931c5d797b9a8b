"""Generative-text API client used to draft weekly workout plans."""

from __future__ import annotations

from typing import Any

import httpx

from fitplanner.ai.extractor import extract_plan_text

API_BASE_URL = "https://generativelanguage.googleapis.com/v1/models"
DEFAULT_MODEL = "gemini-1.5-flash"
DEFAULT_TIMEOUT_SEC = 60.0
MAX_OUTPUT_TOKENS = 800
TEMPERATURE = 0.7


class PlanGenerationError(RuntimeError):
    """Raised when the plan request fails or the API rejects it."""


def build_prompt(goals: str, level: str, time: str, favorites: str, special: str) -> str:
    return (
        "Create a brief, focused weekly workout plan for a person while taking "
        "into consideration the following:\n"
        f"Goal: {goals}\n"
        f"Experience level: {level}\n"
        f"Time commitment: {time}\n"
        f"Favorite exercises: {favorites or 'None specified'}\n"
        f"Special conditions: {special or 'None'}\n"
        "FORMAT REQUIREMENTS:\n"
        "1. Include only 1 short paragraph introduction (2-3 sentences maximum)\n"
        "2. List days with minimal descriptions\n"
        "3. For each exercise include ONLY: name, sets, reps - simple "
        "explanation/reasoning. No more than 1 sentence\n"
        "4. If exercise is considered above the experience level indicated offer "
        "a small explanation\n"
        "5. No detailed warm-up or cool-down sections if no special conditions\n"
        "6. For the special condition, specify why an exercise was picked\n"
        "7. If special condition is entered then offer a brief description of "
        "warm up, cooldowns\n"
        "8. Include theory or extended explanations if you think its needed."
    )


def build_request_body(prompt: str) -> dict[str, Any]:
    return {
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": {
            "maxOutputTokens": MAX_OUTPUT_TOKENS,
            "temperature": TEMPERATURE,
        },
    }


def normalize_body(body: str) -> str:
    """Join the response lines with their indentation stripped.

    Pretty-printed responses then read ``"candidates": [{"content": ...`` on a
    single line, which is what the marker fallbacks look for.
    """
    return "".join(line.strip() for line in body.splitlines())


class PlanClient:
    def __init__(
        self,
        api_key: str | None,
        model: str = DEFAULT_MODEL,
        timeout: float = DEFAULT_TIMEOUT_SEC,
        transport: httpx.AsyncBaseTransport | None = None,
        debug: bool = False,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._timeout = timeout
        self._transport = transport
        self._debug = debug

    @property
    def endpoint(self) -> str:
        return f"{API_BASE_URL}/{self._model}:generateContent"

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    async def generate_plan(
        self,
        goals: str,
        level: str,
        time: str,
        favorites: str = "",
        special: str = "",
    ) -> str:
        if not self._api_key:
            raise PlanGenerationError("No API key configured (set GEMINI_API_KEY or --api-key)")

        prompt = build_prompt(goals, level, time, favorites, special)
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    self.endpoint,
                    params={"key": self._api_key},
                    json=build_request_body(prompt),
                )
        except httpx.HTTPError as exc:
            print(f"[AI] request failed: {exc}")
            raise PlanGenerationError(f"Plan request failed: {exc}") from exc

        body = normalize_body(response.text)
        if response.status_code != 200:
            print(f"[AI] API error {response.status_code}: {body}")
            raise PlanGenerationError(f"API error {response.status_code}: {body}")

        if self._debug:
            print(f"[AI] full response: {body}")
        return extract_plan_text(body)
