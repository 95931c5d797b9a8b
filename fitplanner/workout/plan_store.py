"""Local persistence for the current workout plan."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

from fitplanner.workout.model import WorkoutPlan

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _default_plan_path() -> Path:
    return Path.home() / ".fitplanner" / "workout_plan.txt"


def _header_lines(plan: WorkoutPlan) -> list[str]:
    lines = [
        "# WORKOUT PLAN",
        f"# Generated: {plan.created_at.strftime(DATE_FORMAT)}",
        f"# Goals: {plan.goals}",
        f"# Level: {plan.level}",
        f"# Time: {plan.time}",
    ]
    if plan.favorites:
        lines.append(f"# Favorite: {plan.favorites}")
    if plan.special_conditions:
        lines.append(f"# Special: {plan.special_conditions}")
    lines.append("#")
    lines.append("# ========================")
    return lines


def save_plan(
    plan: WorkoutPlan,
    path: Path | None = None,
    report: Callable[[str], None] = print,
) -> bool:
    target = path or _default_plan_path()
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("w", encoding="utf-8", newline="\n") as handle:
            for line in _header_lines(plan):
                handle.write(line + "\n")
            handle.write("\n")
            handle.write(plan.content + "\n")
    except OSError as exc:
        report(f"[PLAN] error saving workout plan to {target}: {exc}")
        return False
    report(f"[PLAN] workout plan saved to {target}")
    return True


def load_plan_content(
    path: Path | None = None,
    report: Callable[[str], None] = print,
) -> str | None:
    """Return the plan body, or None when there is no plan file.

    Comment lines are skipped until the first blank line; everything after it
    is the body, verbatim. A file with a header and no body gives "".
    """
    target = path or _default_plan_path()
    if not target.exists():
        return None

    body: list[str] = []
    in_plan = False
    try:
        with target.open("r", encoding="utf-8") as handle:
            for raw in handle:
                line = raw.rstrip("\r\n")
                if in_plan:
                    body.append(line + "\n")
                elif line.startswith("#"):
                    continue
                elif not line.strip():
                    in_plan = True
    except OSError as exc:
        report(f"[PLAN] error loading workout plan from {target}: {exc}")
        return None
    return "".join(body)


def plan_exists(path: Path | None = None) -> bool:
    target = path or _default_plan_path()
    return target.is_file() and target.stat().st_size > 0
