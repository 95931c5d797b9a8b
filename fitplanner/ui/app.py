"""Tkinter desktop app: plan generation, plan view and workout tracker."""

from __future__ import annotations

import asyncio
import os
import subprocess
import sys
import threading
import tkinter as tk
from concurrent.futures import Future
from datetime import datetime
from tkinter import messagebox, ttk
from typing import Any, Callable

from fitplanner.core.context import AppContext
from fitplanner.ui.controller import PlannerController
from fitplanner.workout.model import (
    WorkoutPlan,
    WorkoutRecord,
    describe_duration,
    describe_sets_reps,
    display_details,
    estimate_set_duration,
)

LEVELS = ("Beginner", "Intermediate", "Advanced")
NO_PLAN_TEXT = (
    "No workout plan has been generated yet.\n\n"
    "Go to the Start tab and generate a workout plan to see it displayed here."
)


def plan_title(plan: WorkoutPlan | None) -> str:
    if plan is not None and plan.goals:
        return f"Your Workout Plan - {plan.goals}"
    return "Your Workout Plan"


class AsyncBridge:
    def __init__(self) -> None:
        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def _run(self) -> None:
        asyncio.set_event_loop(self._loop)
        self._loop.run_forever()

    def submit(self, coro: Any) -> Future[Any]:
        return asyncio.run_coroutine_threadsafe(coro, self._loop)

    def shutdown(self) -> None:
        self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join(timeout=2.0)


class PlannerUI:
    def __init__(self, root: tk.Tk, context: AppContext) -> None:
        self.root = root
        self.root.title("AI Workout Generator")
        self.root.geometry("1000x700")

        self.context = context
        self.bridge = AsyncBridge()
        self.controller = PlannerController(context)
        self._row_records: dict[str, WorkoutRecord] = {}

        self._build_widgets()
        self._show_plan(self.controller.current_plan())
        self.refresh_workouts()
        self.root.protocol("WM_DELETE_WINDOW", self._on_close)

    def _build_widgets(self) -> None:
        self.notebook = ttk.Notebook(self.root)
        self.notebook.pack(fill=tk.BOTH, expand=True, padx=12, pady=12)

        self.start_tab = ttk.Frame(self.notebook, padding=12)
        self.plan_tab = ttk.Frame(self.notebook, padding=12)
        self.tracker_tab = ttk.Frame(self.notebook, padding=12)
        self.notebook.add(self.start_tab, text="Start")
        self.notebook.add(self.plan_tab, text="Plan")
        self.notebook.add(self.tracker_tab, text="Tracker")

        self._build_start_tab()
        self._build_plan_tab()
        self._build_tracker_tab()

        self.status_var = tk.StringVar(value="Ready")
        ttk.Label(self.root, textvariable=self.status_var, padding=(12, 0, 12, 8)).pack(
            anchor=tk.W
        )

    def _build_start_tab(self) -> None:
        form = self.start_tab
        form.columnconfigure(1, weight=1)

        self.goals_var = tk.StringVar()
        self.level_var = tk.StringVar(value=LEVELS[0])
        self.time_var = tk.StringVar()
        self.fav_var = tk.StringVar()
        self.special_var = tk.StringVar()

        rows: list[tuple[str, tk.StringVar]] = [
            ("Fitness goals", self.goals_var),
            ("Time commitment", self.time_var),
            ("Favorite exercises", self.fav_var),
            ("Special conditions", self.special_var),
        ]
        for i, (label, var) in enumerate(rows):
            ttk.Label(form, text=label).grid(row=i, column=0, sticky=tk.W, pady=4)
            ttk.Entry(form, textvariable=var).grid(row=i, column=1, sticky="ew", pady=4)

        ttk.Label(form, text="Experience level").grid(row=len(rows), column=0, sticky=tk.W)
        levels = ttk.Frame(form)
        levels.grid(row=len(rows), column=1, sticky=tk.W, pady=4)
        for level in LEVELS:
            ttk.Radiobutton(levels, text=level, value=level, variable=self.level_var).pack(
                side=tk.LEFT, padx=(0, 12)
            )

        self.generate_btn = ttk.Button(form, text="Generate Plan", command=self.on_generate)
        self.generate_btn.grid(row=len(rows) + 1, column=1, sticky=tk.E, pady=(12, 0))
        if not self.controller.api_configured:
            ttk.Label(
                form,
                text="No API key configured: set GEMINI_API_KEY or pass --api-key",
                foreground="#b91c1c",
            ).grid(row=len(rows) + 2, column=0, columnspan=2, sticky=tk.W, pady=(8, 0))

    def _build_plan_tab(self) -> None:
        bar = ttk.Frame(self.plan_tab)
        bar.pack(fill=tk.X)
        self.plan_title_var = tk.StringVar(value="Your Workout Plan")
        ttk.Label(bar, textvariable=self.plan_title_var, font=("DejaVu Sans", 14, "bold")).pack(
            side=tk.LEFT
        )
        ttk.Button(bar, text="Open Plan File", command=self.on_open_plan_file).pack(side=tk.RIGHT)
        ttk.Button(bar, text="Save as Workout", command=self.on_save_plan_as_workout).pack(
            side=tk.RIGHT, padx=8
        )

        self.plan_text = tk.Text(self.plan_tab, wrap=tk.WORD)
        self.plan_text.pack(fill=tk.BOTH, expand=True, pady=(8, 0))

    def _build_tracker_tab(self) -> None:
        columns = ("date", "name", "details", "notes")
        self.table = ttk.Treeview(self.tracker_tab, columns=columns, show="headings", height=14)
        for column, heading, width in (
            ("date", "Date", 150),
            ("name", "Exercise", 160),
            ("details", "Details", 220),
            ("notes", "Notes", 260),
        ):
            self.table.heading(column, text=heading)
            self.table.column(column, width=width)
        self.table.pack(fill=tk.BOTH, expand=True)
        self.table.bind("<<TreeviewSelect>>", self._on_table_select)

        actions = ttk.Frame(self.tracker_tab)
        actions.pack(fill=tk.X, pady=8)
        self.delete_btn = ttk.Button(
            actions,
            text="Delete Selected",
            command=self.on_delete_workout,
            state=tk.DISABLED,
        )
        self.delete_btn.pack(side=tk.RIGHT)

        form = ttk.LabelFrame(self.tracker_tab, text="Add workout", padding=8)
        form.pack(fill=tk.X)

        self.track_mode_var = tk.StringVar(value="duration")
        self.name_var = tk.StringVar()
        self.duration_var = tk.StringVar()
        self.sets_var = tk.StringVar()
        self.reps_var = tk.StringVar()
        self.weight_var = tk.StringVar()
        self.notes_var = tk.StringVar()

        ttk.Label(form, text="Exercise").grid(row=0, column=0, sticky=tk.W)
        ttk.Entry(form, textvariable=self.name_var, width=28).grid(row=0, column=1, sticky=tk.W)
        ttk.Radiobutton(
            form,
            text="Duration",
            value="duration",
            variable=self.track_mode_var,
            command=self._refresh_track_mode,
        ).grid(row=0, column=2, padx=(12, 0))
        ttk.Radiobutton(
            form,
            text="Sets / reps",
            value="sets",
            variable=self.track_mode_var,
            command=self._refresh_track_mode,
        ).grid(row=0, column=3)

        ttk.Label(form, text="Minutes").grid(row=1, column=0, sticky=tk.W, pady=(6, 0))
        self.duration_entry = ttk.Entry(form, textvariable=self.duration_var, width=8)
        self.duration_entry.grid(row=1, column=1, sticky=tk.W, pady=(6, 0))

        ttk.Label(form, text="Sets / reps / lbs").grid(row=2, column=0, sticky=tk.W, pady=(6, 0))
        sets_row = ttk.Frame(form)
        sets_row.grid(row=2, column=1, columnspan=3, sticky=tk.W, pady=(6, 0))
        self.sets_entries = [
            ttk.Entry(sets_row, textvariable=var, width=6)
            for var in (self.sets_var, self.reps_var, self.weight_var)
        ]
        for entry in self.sets_entries:
            entry.pack(side=tk.LEFT, padx=(0, 6))

        ttk.Label(form, text="Notes").grid(row=3, column=0, sticky=tk.W, pady=(6, 0))
        ttk.Entry(form, textvariable=self.notes_var, width=60).grid(
            row=3, column=1, columnspan=3, sticky=tk.W, pady=(6, 0)
        )
        ttk.Button(form, text="Save Workout", command=self.on_add_workout).grid(
            row=4, column=3, sticky=tk.E, pady=(8, 0)
        )
        self._refresh_track_mode()

    def _call_ui(self, fn: Callable[[], None]) -> None:
        self.root.after(0, fn)

    def _refresh_track_mode(self) -> None:
        by_duration = self.track_mode_var.get() == "duration"
        self.duration_entry.configure(state=tk.NORMAL if by_duration else tk.DISABLED)
        for entry in self.sets_entries:
            entry.configure(state=tk.DISABLED if by_duration else tk.NORMAL)

    def _show_plan(self, plan: WorkoutPlan | None) -> None:
        self.plan_text.delete("1.0", tk.END)
        self.plan_title_var.set(plan_title(plan))
        if plan is None or not plan.content:
            self.plan_text.insert("1.0", NO_PLAN_TEXT)
            return
        self.plan_text.insert("1.0", plan.content)
        self.plan_text.see("1.0")

    def refresh_workouts(self) -> None:
        self.table.delete(*self.table.get_children())
        self._row_records.clear()
        for record in self.controller.all_workouts():
            row_id = self.table.insert(
                "",
                tk.END,
                values=(
                    record.timestamp.strftime("%Y-%m-%d %H:%M"),
                    record.name,
                    display_details(record),
                    record.notes,
                ),
            )
            self._row_records[row_id] = record
        self.delete_btn.configure(state=tk.DISABLED)

    def _on_table_select(self, _event: tk.Event[tk.Misc]) -> None:
        state = tk.NORMAL if self.table.selection() else tk.DISABLED
        self.delete_btn.configure(state=state)

    def on_generate(self) -> None:
        goals = self.goals_var.get().strip()
        time = self.time_var.get().strip()
        if not goals or not time:
            messagebox.showwarning(
                "Missing Information",
                "Please fill in your goals and time commitment.",
            )
            return
        self.generate_btn.configure(state=tk.DISABLED)
        self.status_var.set("Generating your workout plan... Please wait.")
        future = self.bridge.submit(
            self.controller.generate_plan(
                goals,
                self.level_var.get(),
                time,
                self.fav_var.get().strip(),
                self.special_var.get().strip(),
            )
        )
        future.add_done_callback(self._on_generate_done)

    def _on_generate_done(self, future: Future[WorkoutPlan]) -> None:
        def update() -> None:
            self.generate_btn.configure(state=tk.NORMAL)
            try:
                plan = future.result()
            except Exception as exc:
                self.status_var.set("Plan generation failed")
                messagebox.showerror("Error", f"Failed to get workout plan from AI:\n{exc}")
                return
            self._show_plan(plan)
            self.status_var.set("Workout plan generated")
            self.notebook.select(self.plan_tab)

        self._call_ui(update)

    def on_save_plan_as_workout(self) -> None:
        try:
            self.controller.add_plan_to_log()
        except ValueError as exc:
            messagebox.showerror("Error", str(exc))
            return
        self.refresh_workouts()
        messagebox.showinfo("Success", "Workout plan saved to tracker!")

    def on_open_plan_file(self) -> None:
        path = self.context.plan_path
        if not path.exists():
            messagebox.showinfo(
                "File Not Found",
                "No workout plan file found. Generate a plan first.",
            )
            return
        try:
            if sys.platform.startswith("win"):
                os.startfile(path)  # type: ignore[attr-defined]
            else:
                opener = "open" if sys.platform == "darwin" else "xdg-open"
                subprocess.Popen([opener, str(path)])
        except OSError as exc:
            messagebox.showerror("Error", f"Could not open the workout plan file: {exc}")

    def on_add_workout(self) -> None:
        name = self.name_var.get().strip()
        if not name:
            messagebox.showerror("Input Error", "Please enter an exercise name.")
            return

        if self.track_mode_var.get() == "duration":
            try:
                duration = int(self.duration_var.get().strip())
            except ValueError:
                messagebox.showerror("Input Error", "Please enter a valid duration in minutes.")
                return
            description = describe_duration(duration)
        else:
            sets = self.sets_var.get().strip()
            reps = self.reps_var.get().strip()
            if not sets or not reps:
                messagebox.showerror("Input Error", "Please enter both sets and reps.")
                return
            description = describe_sets_reps(sets, reps, self.weight_var.get())
            duration = estimate_set_duration(sets)

        self.controller.add_workout(
            name,
            datetime.now(),
            duration,
            description,
            self.notes_var.get().strip(),
        )
        for var in (
            self.name_var,
            self.duration_var,
            self.sets_var,
            self.reps_var,
            self.weight_var,
            self.notes_var,
        ):
            var.set("")
        self.refresh_workouts()

    def on_delete_workout(self) -> None:
        selection = self.table.selection()
        if not selection:
            return
        record = self._row_records.get(selection[0])
        if record is None:
            return
        if not messagebox.askyesno("Confirm Delete", "Are you sure you want to delete this workout?"):
            return
        self.controller.remove_workout(record)
        self.refresh_workouts()

    def _on_close(self) -> None:
        self.bridge.shutdown()
        self.root.destroy()


def run_ui(context: AppContext) -> int:
    root = tk.Tk()
    PlannerUI(root, context)
    root.mainloop()
    return 0
