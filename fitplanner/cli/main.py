"""Entry point: launches the desktop app or prints stored data."""

from __future__ import annotations

import argparse

from fitplanner.core.config import load_settings
from fitplanner.core.context import AppContext
from fitplanner.ui.controller import PlannerController
from fitplanner.workout.model import display_details


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="AI workout plan generator and tracker")
    parser.add_argument(
        "--data-dir",
        default=None,
        help="Directory holding workout_plan.txt and workouts.txt (default ~/.fitplanner)",
    )
    parser.add_argument("--api-key", default=None, help="Generative API key (or GEMINI_API_KEY)")
    parser.add_argument("--model", default=None, help="Model name used for plan generation")
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds to wait for the plan request",
    )
    parser.add_argument(
        "--show-plan",
        action="store_true",
        help="Print the current workout plan and exit",
    )
    parser.add_argument(
        "--recent",
        type=int,
        default=None,
        metavar="N",
        help="Print the N most recent logged workouts and exit",
    )
    parser.add_argument(
        "--debug-ai",
        action="store_true",
        help="Print the full API response for each plan request",
    )
    return parser


def run_show_plan(controller: PlannerController) -> int:
    content = controller.current_plan_content()
    if content is None:
        print("No workout plan found")
        return 1
    print(content, end="" if content.endswith("\n") else "\n")
    return 0


def run_recent(controller: PlannerController, count: int) -> int:
    workouts = controller.recent_workouts(count)
    if not workouts:
        print("No workouts logged")
        return 0
    for record in workouts:
        stamp = record.timestamp.strftime("%Y-%m-%d %H:%M")
        print(f"{stamp}  {record.name:<24} {display_details(record)}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    context = AppContext.from_settings(load_settings(args))

    if args.show_plan:
        return run_show_plan(PlannerController(context))
    if args.recent is not None:
        return run_recent(PlannerController(context), args.recent)

    from fitplanner.ui.app import run_ui

    return run_ui(context)


if __name__ == "__main__":
    raise SystemExit(main())
