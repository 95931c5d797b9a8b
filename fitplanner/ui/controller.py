"""Controller used by the desktop UI and the CLI."""

from __future__ import annotations

from datetime import datetime

from fitplanner.core.context import AppContext
from fitplanner.workout.model import WorkoutPlan, WorkoutRecord, record_from_plan
from fitplanner.workout.plan_store import load_plan_content, plan_exists, save_plan


class PlannerController:
    def __init__(self, context: AppContext) -> None:
        self._context = context
        self._plan: WorkoutPlan | None = None

    async def generate_plan(
        self,
        goals: str,
        level: str,
        time: str,
        favorites: str = "",
        special: str = "",
    ) -> WorkoutPlan:
        content = await self._context.client.generate_plan(goals, level, time, favorites, special)
        plan = WorkoutPlan(
            content=content,
            goals=goals,
            level=level,
            time=time,
            favorites=favorites,
            special_conditions=special,
        )
        save_plan(plan, self._context.plan_path)
        self._plan = plan
        return plan

    def current_plan(self) -> WorkoutPlan | None:
        if self._plan is None and plan_exists(self._context.plan_path):
            content = load_plan_content(self._context.plan_path)
            if content is not None:
                self._plan = WorkoutPlan(content=content)
        return self._plan

    def current_plan_content(self) -> str | None:
        plan = self.current_plan()
        return plan.content if plan is not None else None

    def add_workout(
        self,
        name: str,
        timestamp: datetime,
        duration_minutes: int,
        description: str = "",
        notes: str = "",
    ) -> WorkoutRecord:
        if not name.strip():
            raise ValueError("Please enter an exercise name.")
        record = WorkoutRecord(
            name=name.strip(),
            timestamp=timestamp,
            duration_minutes=duration_minutes,
            description=description,
            notes=notes,
        )
        self._context.workouts.add(record)
        return record

    def add_plan_to_log(self, now: datetime | None = None) -> WorkoutRecord:
        plan = self.current_plan()
        if plan is None:
            raise ValueError("No workout plan to save!")
        record = record_from_plan(plan, now=now)
        self._context.workouts.add(record)
        return record

    def remove_workout(self, record: WorkoutRecord) -> None:
        self._context.workouts.remove(record)

    def all_workouts(self) -> list[WorkoutRecord]:
        return self._context.workouts.all()

    def workouts_between(self, start: datetime, end: datetime) -> list[WorkoutRecord]:
        return self._context.workouts.by_date_range(start, end)

    def recent_workouts(self, count: int) -> list[WorkoutRecord]:
        return self._context.workouts.recent(count)

    @property
    def api_configured(self) -> bool:
        return self._context.client.configured
