"""Runtime settings resolved from command-line flags and the environment."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from fitplanner.ai.client import DEFAULT_MODEL, DEFAULT_TIMEOUT_SEC

PLAN_FILE_NAME = "workout_plan.txt"
WORKOUTS_FILE_NAME = "workouts.txt"

ENV_DATA_DIR = "FITPLANNER_DATA_DIR"
ENV_API_KEY = "GEMINI_API_KEY"
ENV_MODEL = "FITPLANNER_MODEL"


def _default_data_dir() -> Path:
    return Path.home() / ".fitplanner"


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    api_key: str | None = None
    model: str = DEFAULT_MODEL
    timeout_sec: float = DEFAULT_TIMEOUT_SEC
    debug_ai: bool = False

    @property
    def plan_path(self) -> Path:
        return self.data_dir / PLAN_FILE_NAME

    @property
    def workouts_path(self) -> Path:
        return self.data_dir / WORKOUTS_FILE_NAME


def load_settings(
    args: argparse.Namespace | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Flags win over environment variables, which win over defaults."""
    env = os.environ if environ is None else environ

    data_dir_raw = getattr(args, "data_dir", None) or env.get(ENV_DATA_DIR)
    data_dir = Path(data_dir_raw).expanduser() if data_dir_raw else _default_data_dir()

    timeout = getattr(args, "timeout", None)
    return Settings(
        data_dir=data_dir,
        api_key=getattr(args, "api_key", None) or env.get(ENV_API_KEY) or None,
        model=getattr(args, "model", None) or env.get(ENV_MODEL) or DEFAULT_MODEL,
        timeout_sec=float(timeout) if timeout is not None else DEFAULT_TIMEOUT_SEC,
        debug_ai=bool(getattr(args, "debug_ai", False)),
    )
