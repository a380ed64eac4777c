"""Ordered, append-only workout collection."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Union

from mapty.workout.model import Workout


@dataclass
class OpaqueEntry:
    """A persisted entry that is neither a valid running nor cycling record.

    Kept verbatim so a later save writes it back untouched.
    """

    payload: dict[str, Any]
    reason: str = ""

    @property
    def id(self) -> str | None:
        raw = self.payload.get("id")
        return None if raw is None else str(raw)

    @property
    def kind(self) -> str | None:
        raw = self.payload.get("type")
        return raw if isinstance(raw, str) else None


Entry = Union[Workout, OpaqueEntry]


@dataclass
class WorkoutCollection:
    entries: list[Entry] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.entries)

    def __getitem__(self, index: int) -> Entry:
        return self.entries[index]

    def append(self, entry: Entry) -> None:
        self.entries.append(entry)

    def workouts(self) -> list[Workout]:
        return [entry for entry in self.entries if isinstance(entry, Workout)]

    def find_by_id(self, workout_id: str) -> Entry | None:
        for entry in self.entries:
            if entry.id == workout_id:
                return entry
        return None

    def increment_clicks(self, workout_id: str) -> Workout | None:
        entry = self.find_by_id(workout_id)
        if not isinstance(entry, Workout):
            return None
        entry.click()
        return entry
