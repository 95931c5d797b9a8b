"""Local pipe-delimited log of workout records."""

from __future__ import annotations

import re
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterable

from fitplanner.workout.model import WorkoutRecord

HEADER = "# Workout Data - Format: Date|Name|Duration|Description|Notes"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
FIELD_COUNT = 5

_ESCAPES = {"\\": "\\", "|": "|", "n": "\n", "r": "\r", "t": "\t", "s": " "}
_ESCAPE_RE = re.compile(r"\\(u[0-9a-fA-F]{4}|.)", re.DOTALL)


def _default_workouts_path() -> Path:
    return Path.home() / ".fitplanner" / "workouts.txt"


def _escape_edge(ch: str) -> str:
    return "\\s" if ch == " " else f"\\u{ord(ch):04x}"


def escape_field(value: str) -> str:
    """Escape a field for the log.

    Leading and trailing whitespace is escaped too, since fields are trimmed
    on load.
    """
    text = (
        value.replace("\\", "\\\\")
        .replace("|", "\\|")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )
    lead = len(text) - len(text.lstrip())
    trail = len(text) - len(text.rstrip()) if lead < len(text) else 0
    middle = text[lead : len(text) - trail]
    return (
        "".join(_escape_edge(ch) for ch in text[:lead])
        + middle
        + "".join(_escape_edge(ch) for ch in text[len(text) - trail :])
    )


def _unescape(match: re.Match[str]) -> str:
    token = match.group(1)
    if len(token) == 5:
        return chr(int(token[1:], 16))
    return _ESCAPES.get(token, match.group(0))


def unescape_field(value: str) -> str:
    return _ESCAPE_RE.sub(_unescape, value)


def split_fields(line: str, limit: int = FIELD_COUNT) -> list[str]:
    """Split on unescaped ``|``; the last field keeps any further delimiters."""
    fields: list[str] = []
    start = 0
    escaped = False
    for i, ch in enumerate(line):
        if len(fields) == limit - 1:
            break
        if escaped:
            escaped = False
        elif ch == "\\":
            escaped = True
        elif ch == "|":
            fields.append(line[start:i])
            start = i + 1
    fields.append(line[start:])
    return fields


def format_record(record: WorkoutRecord) -> str:
    return "|".join(
        [
            record.timestamp.strftime(DATE_FORMAT),
            escape_field(record.name),
            str(record.duration_minutes),
            escape_field(record.description),
            escape_field(record.notes),
        ]
    )


def parse_record(line: str) -> WorkoutRecord:
    """Parse one log line. Raises ValueError on a malformed line."""
    parts = [part.strip() for part in split_fields(line)]
    if len(parts) < FIELD_COUNT:
        raise ValueError(f"expected {FIELD_COUNT} fields, got {len(parts)}")
    return WorkoutRecord(
        name=unescape_field(parts[1]),
        timestamp=datetime.strptime(parts[0], DATE_FORMAT),
        duration_minutes=int(parts[2]),
        description=unescape_field(parts[3]),
        notes=unescape_field(parts[4]),
    )


class RecordStore:
    """Ordered workout records mirrored to a flat file.

    Every mutation rewrites the whole file. Readers get copies of the
    in-memory list, never the list itself.
    """

    def __init__(
        self,
        path: Path | None = None,
        report: Callable[[str], None] | None = None,
    ) -> None:
        self.path = path or _default_workouts_path()
        self._report = report or print
        self._records: list[WorkoutRecord] = self.load()

    def load(self) -> list[WorkoutRecord]:
        if not self.path.exists():
            return []
        try:
            # Only "\n" ends a record; other line-break characters are field data.
            with self.path.open("r", encoding="utf-8", newline="") as handle:
                lines = [line.removesuffix("\r") for line in handle.read().split("\n")]
        except OSError as exc:
            self._report(f"[STORE] error loading workouts from {self.path}: {exc}")
            return []

        out: list[WorkoutRecord] = []
        # First line is the header, whatever it contains.
        for raw in lines[1:]:
            if not raw.strip():
                continue
            try:
                out.append(parse_record(raw))
            except ValueError as exc:
                self._report(f"[STORE] skipping malformed workout line ({exc}): {raw}")
        return out

    def save(self, records: Iterable[WorkoutRecord] | None = None) -> bool:
        items = list(self._records if records is None else records)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8", newline="\n") as handle:
                handle.write(HEADER + "\n")
                for record in items:
                    handle.write(format_record(record) + "\n")
        except OSError as exc:
            self._report(f"[STORE] error saving workouts to {self.path}: {exc}")
            return False
        return True

    def add(self, record: WorkoutRecord) -> bool:
        self._records.append(record)
        return self.save()

    def remove(self, record: WorkoutRecord) -> bool:
        # First value-equal match; identical records are indistinguishable.
        if record in self._records:
            self._records.remove(record)
        return self.save()

    def all(self) -> list[WorkoutRecord]:
        return list(self._records)

    def by_date_range(self, start: datetime, end: datetime) -> list[WorkoutRecord]:
        return [r for r in self._records if start <= r.timestamp <= end]

    def recent(self, count: int) -> list[WorkoutRecord]:
        if count <= 0:
            return []
        ordered = sorted(self._records, key=lambda r: r.timestamp, reverse=True)
        return ordered[:count]
