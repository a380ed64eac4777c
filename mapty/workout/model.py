"""Workout domain models."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal, Union
from uuid import uuid4

WorkoutKind = Literal["running", "cycling"]

MONTHS: tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


@dataclass(frozen=True)
class RunningDetails:
    cadence: float
    kind: WorkoutKind = field(default="running", init=False)


@dataclass(frozen=True)
class CyclingDetails:
    elevation_gain: float
    kind: WorkoutKind = field(default="cycling", init=False)


WorkoutDetails = Union[RunningDetails, CyclingDetails]


def new_workout_id() -> str:
    return uuid4().hex


def now_local() -> datetime:
    return datetime.now().astimezone()


def describe(kind: str, date: datetime) -> str:
    return f"{kind[:1].upper()}{kind[1:]} on {MONTHS[date.month - 1]} {date.day}"


def _divide(numerator: float, denominator: float) -> float:
    # IEEE semantics instead of ZeroDivisionError: x/0 -> +/-inf, 0/0 -> nan.
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


@dataclass
class Workout:
    """One logged session anchored to a map position.

    Base fields are shared by every kind; ``details`` carries the
    kind-specific input. Pace, speed and description are derived on access
    so they always agree with distance, duration and date.
    """

    id: str
    date: datetime
    coords: tuple[float, float]
    distance: float
    duration: float
    details: WorkoutDetails
    clicks: int = 0

    @property
    def kind(self) -> WorkoutKind:
        return self.details.kind

    @property
    def description(self) -> str:
        return describe(self.kind, self.date)

    @property
    def cadence(self) -> float | None:
        if isinstance(self.details, RunningDetails):
            return self.details.cadence
        return None

    @property
    def elevation_gain(self) -> float | None:
        if isinstance(self.details, CyclingDetails):
            return self.details.elevation_gain
        return None

    @property
    def pace(self) -> float | None:
        """Minutes per kilometer, running only."""
        if isinstance(self.details, RunningDetails):
            return _divide(self.duration, self.distance)
        return None

    @property
    def speed(self) -> float | None:
        """Kilometers per hour, cycling only."""
        if isinstance(self.details, CyclingDetails):
            return _divide(self.distance, _divide(self.duration, 60))
        return None

    def click(self) -> int:
        self.clicks += 1
        return self.clicks


def new_workout(
    kind: str,
    coords: tuple[float, float],
    distance: float,
    duration: float,
    extra: float,
    *,
    workout_id: str | None = None,
    date: datetime | None = None,
) -> Workout:
    """Build a fully derived workout.

    ``extra`` is the cadence for running and the elevation gain for cycling.
    No range validation happens here; see ``creation.create_workout``.
    """
    details: WorkoutDetails
    if kind == "running":
        details = RunningDetails(cadence=extra)
    elif kind == "cycling":
        details = CyclingDetails(elevation_gain=extra)
    else:
        raise ValueError(f"Unknown workout kind '{kind}'")

    lat, lng = coords
    return Workout(
        id=workout_id or new_workout_id(),
        date=date or now_local(),
        coords=(lat, lng),
        distance=distance,
        duration=duration,
        details=details,
    )


def new_running(
    coords: tuple[float, float],
    distance: float,
    duration: float,
    cadence: float,
    *,
    workout_id: str | None = None,
    date: datetime | None = None,
) -> Workout:
    return new_workout(
        "running", coords, distance, duration, cadence, workout_id=workout_id, date=date
    )


def new_cycling(
    coords: tuple[float, float],
    distance: float,
    duration: float,
    elevation_gain: float,
    *,
    workout_id: str | None = None,
    date: datetime | None = None,
) -> Workout:
    return new_workout(
        "cycling",
        coords,
        distance,
        duration,
        elevation_gain,
        workout_id=workout_id,
        date=date,
    )
