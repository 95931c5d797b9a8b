from __future__ import annotations

import asyncio
import json
from datetime import datetime
from pathlib import Path

import httpx
import pytest

from fitplanner.core.config import Settings
from fitplanner.core.context import AppContext
from fitplanner.ui.controller import PlannerController
from fitplanner.workout.plan_store import load_plan_content


def _context(tmp_path: Path, plan_text: str = "Monday: Squat 3x10") -> AppContext:
    def handler(request: httpx.Request) -> httpx.Response:
        payload = {"candidates": [{"content": {"parts": [{"text": plan_text}]}}]}
        return httpx.Response(200, text=json.dumps(payload))

    settings = Settings(data_dir=tmp_path, api_key="secret")
    return AppContext.from_settings(settings, transport=httpx.MockTransport(handler))


def test_generate_plan_persists_and_becomes_current(tmp_path: Path) -> None:
    context = _context(tmp_path)
    controller = PlannerController(context)

    plan = asyncio.run(
        controller.generate_plan("Build muscle", "Beginner", "3 hours", "Push-ups", "")
    )

    assert plan.content == "Monday: Squat 3x10"
    assert plan.goals == "Build muscle"
    assert controller.current_plan() is plan
    assert load_plan_content(context.plan_path) == "Monday: Squat 3x10\n"


def test_current_plan_is_rebuilt_from_file(tmp_path: Path) -> None:
    asyncio.run(PlannerController(_context(tmp_path)).generate_plan("Run", "Advanced", "5h"))

    fresh = PlannerController(_context(tmp_path))

    assert fresh.current_plan_content() == "Monday: Squat 3x10\n"


def test_no_plan_yet(tmp_path: Path) -> None:
    controller = PlannerController(_context(tmp_path))

    assert controller.current_plan() is None
    assert controller.current_plan_content() is None
    with pytest.raises(ValueError):
        controller.add_plan_to_log()


def test_add_workout_rejects_blank_name(tmp_path: Path) -> None:
    controller = PlannerController(_context(tmp_path))

    with pytest.raises(ValueError):
        controller.add_workout("   ", datetime(2025, 6, 15), 30, "Push-ups", "")
    assert controller.all_workouts() == []


def test_workout_log_operations(tmp_path: Path) -> None:
    controller = PlannerController(_context(tmp_path))
    early = controller.add_workout("Run", datetime(2025, 6, 1, 7, 0), 30, "30 minutes")
    late = controller.add_workout("Swim", datetime(2025, 6, 3, 7, 0), 45, "45 minutes")

    assert controller.recent_workouts(1) == [late]
    assert controller.workouts_between(datetime(2025, 6, 1), datetime(2025, 6, 2)) == [early]

    controller.remove_workout(early)

    assert PlannerController(_context(tmp_path)).all_workouts() == [late]


def test_add_plan_to_log(tmp_path: Path) -> None:
    controller = PlannerController(_context(tmp_path))
    asyncio.run(controller.generate_plan("Lose weight", "Beginner", "2 hours"))

    record = controller.add_plan_to_log(now=datetime(2025, 6, 15, 12, 0))

    assert record.name == "Workout Plan - Lose weight"
    assert record.description == "Monday: Squat 3x10"
    assert controller.all_workouts() == [record]
