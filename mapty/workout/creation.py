"""Validation gate turning raw form input into a workout."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Callable

from mapty.workout.model import Workout, new_workout

INVALID_INPUT_MESSAGE = "Inputs have to be positive numbers!"


class InvalidInput(ValueError):
    """Raised when a form field is not a finite, positive number."""

    def __init__(self, field_name: str, message: str = INVALID_INPUT_MESSAGE) -> None:
        super().__init__(message)
        self.field_name = field_name
        self.message = message


def create_workout(
    *,
    kind: str,
    coords: object,
    distance: object,
    duration: object,
    cadence: object = None,
    elevation_gain: object = None,
    now: datetime | None = None,
    new_id: Callable[[], str] | None = None,
) -> Workout:
    kind_value = str(kind).strip().lower()
    if kind_value not in ("running", "cycling"):
        raise InvalidInput("type", f"Unknown workout type '{kind}'")

    lat_lng = _parse_coords(coords)
    distance_km = _parse_number_field(raw=distance, field_name="distance")
    duration_min = _parse_number_field(raw=duration, field_name="duration")

    if kind_value == "running":
        extra = _parse_number_field(raw=cadence, field_name="cadence")
        _require_positive(distance=distance_km, duration=duration_min, cadence=extra)
    else:
        # Elevation may be zero or negative (downhill rides).
        extra = _parse_number_field(raw=elevation_gain, field_name="elevation_gain")
        _require_positive(distance=distance_km, duration=duration_min)

    return new_workout(
        kind_value,
        lat_lng,
        distance_km,
        duration_min,
        extra,
        workout_id=new_id() if new_id is not None else None,
        date=now,
    )


def _require_positive(**values: float) -> None:
    for field_name, value in values.items():
        if value <= 0:
            raise InvalidInput(field_name)


def _parse_number_field(*, raw: object, field_name: str) -> float:
    """Coerce a form value like a browser number input would.

    Blank text counts as zero, so it only passes where zero is allowed.
    """
    if raw is None or isinstance(raw, bool):
        raise InvalidInput(field_name)
    if isinstance(raw, (int, float)):
        try:
            value = float(raw)
        except OverflowError as exc:
            raise InvalidInput(field_name) from exc
    else:
        text = str(raw).strip()
        try:
            value = float(text) if text else 0.0
        except ValueError as exc:
            raise InvalidInput(field_name) from exc
    if not math.isfinite(value):
        raise InvalidInput(field_name)
    return value


def _parse_coords(raw: object) -> tuple[float, float]:
    if (
        not isinstance(raw, (tuple, list))
        or len(raw) != 2
        or any(isinstance(part, str) and not part.strip() for part in raw)
    ):
        raise InvalidInput("coords", "Pick a position on the map first")
    lat = _parse_number_field(raw=raw[0], field_name="coords")
    lng = _parse_number_field(raw=raw[1], field_name="coords")
    return lat, lng
