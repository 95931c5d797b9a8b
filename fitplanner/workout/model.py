"""Workout domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

PLAN_RECORD_NAME_LIMIT = 50


@dataclass(frozen=True)
class WorkoutPlan:
    content: str
    goals: str = ""
    level: str = ""
    time: str = ""
    favorites: str = ""
    special_conditions: str = ""
    created_at: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class WorkoutRecord:
    name: str
    timestamp: datetime
    duration_minutes: int
    description: str = ""
    notes: str = ""

    def __post_init__(self) -> None:
        # The log file stores seconds only.
        if self.timestamp.microsecond:
            object.__setattr__(self, "timestamp", self.timestamp.replace(microsecond=0))


def describe_duration(minutes: int) -> str:
    return f"{minutes} minutes"


def describe_sets_reps(sets: str, reps: str, weight: str = "") -> str:
    text = f"{sets.strip()} sets × {reps.strip()} reps"
    if weight.strip():
        text += f" @ {weight.strip()} lbs"
    return text


def estimate_set_duration(sets: str) -> int:
    """Rough session length for sets/reps entries: two minutes per set."""
    try:
        return int(sets.strip()) * 2
    except ValueError:
        return 0


def display_details(record: WorkoutRecord) -> str:
    if "sets" in record.description and "reps" in record.description:
        return record.description
    return f"{record.duration_minutes} mins"


def record_from_plan(plan: WorkoutPlan, now: datetime | None = None) -> WorkoutRecord:
    name = f"Workout Plan - {plan.goals}"
    if len(name) > PLAN_RECORD_NAME_LIMIT:
        name = name[: PLAN_RECORD_NAME_LIMIT - 3] + "..."
    return WorkoutRecord(
        name=name,
        timestamp=now or datetime.now(),
        duration_minutes=0,
        description=plan.content,
        notes=f"Generated workout plan based on goals: {plan.goals}",
    )
