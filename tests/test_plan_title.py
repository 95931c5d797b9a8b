from __future__ import annotations

import pytest

pytest.importorskip("tkinter")

from fitplanner.ui.app import plan_title  # noqa: E402
from fitplanner.workout.model import WorkoutPlan  # noqa: E402


def test_plan_title_follows_goals() -> None:
    assert plan_title(WorkoutPlan(content="x", goals="Strength")) == "Your Workout Plan - Strength"


def test_plan_title_resets_without_goals() -> None:
    assert plan_title(WorkoutPlan(content="Reloaded from file")) == "Your Workout Plan"
    assert plan_title(None) == "Your Workout Plan"
