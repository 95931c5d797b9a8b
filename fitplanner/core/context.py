"""Application context shared by the controller and the UI.

Built once at start-up and passed around explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import httpx

from fitplanner.ai.client import PlanClient
from fitplanner.core.config import Settings
from fitplanner.workout.record_store import RecordStore


@dataclass
class AppContext:
    settings: Settings
    client: PlanClient
    workouts: RecordStore

    @property
    def plan_path(self) -> Path:
        return self.settings.plan_path

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> AppContext:
        client = PlanClient(
            api_key=settings.api_key,
            model=settings.model,
            timeout=settings.timeout_sec,
            transport=transport,
            debug=settings.debug_ai,
        )
        return cls(
            settings=settings,
            client=client,
            workouts=RecordStore(settings.workouts_path),
        )
