"""JSON persistence for the workout collection."""

from __future__ import annotations

import json
import logging
import math
from datetime import datetime
from typing import Any

from mapty.workout.collection import Entry, OpaqueEntry, WorkoutCollection
from mapty.workout.model import Workout, new_workout
from mapty.workout.storage import KeyValueStorage, StorageUnavailable

logger = logging.getLogger(__name__)

STORAGE_KEY = "workouts"

_EXTRA_FIELD = {"running": "cadence", "cycling": "elevationGain"}


class MalformedPersistedEntry(ValueError):
    """Raised when a stored entry does not match either workout schema."""


def workout_to_dict(workout: Workout) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": workout.id,
        "date": workout.date.isoformat(),
        "coords": [workout.coords[0], workout.coords[1]],
        "distance": workout.distance,
        "duration": workout.duration,
        "type": workout.kind,
        "clicks": workout.clicks,
        "description": workout.description,
    }
    if workout.kind == "running":
        payload["cadence"] = workout.cadence
        payload["pace"] = _finite_or_none(workout.pace)
    else:
        payload["elevationGain"] = workout.elevation_gain
        payload["speed"] = _finite_or_none(workout.speed)
    return payload


def workout_from_dict(item: dict[str, Any]) -> Workout:
    """Rebuild a workout by replaying construction.

    Pace, speed and description are recomputed; only id, date and clicks
    are taken from the stored entry.
    """
    kind = item.get("type")
    if kind not in _EXTRA_FIELD:
        raise MalformedPersistedEntry(f"Unknown workout type {kind!r}")

    workout_id = item.get("id")
    if isinstance(workout_id, bool) or not isinstance(workout_id, (str, int)):
        raise MalformedPersistedEntry("Field 'id' must be a string")
    if str(workout_id) == "":
        raise MalformedPersistedEntry("Field 'id' must not be empty")

    coords = item.get("coords")
    if not isinstance(coords, list) or len(coords) != 2:
        raise MalformedPersistedEntry("Field 'coords' must be a [lat, lng] pair")

    workout = new_workout(
        kind,
        (_number(coords[0], "coords"), _number(coords[1], "coords")),
        _number(item.get("distance"), "distance"),
        _number(item.get("duration"), "duration"),
        _number(item.get(_EXTRA_FIELD[kind]), _EXTRA_FIELD[kind]),
        workout_id=str(workout_id),
        date=_parse_date(item.get("date")),
    )
    workout.clicks = _parse_clicks(item.get("clicks", 0))
    return workout


def dump_workouts(collection: WorkoutCollection) -> str:
    items: list[dict[str, Any]] = []
    for entry in collection:
        if isinstance(entry, Workout):
            items.append(workout_to_dict(entry))
        else:
            items.append(entry.payload)
    return json.dumps(items, ensure_ascii=True)


def parse_workouts(blob: str | None) -> WorkoutCollection:
    """Parse a stored blob; never raises.

    Bad entries degrade to ``OpaqueEntry`` so one entry cannot sink the
    whole load.
    """
    if not blob or not blob.strip():
        return WorkoutCollection()
    try:
        data = json.loads(blob)
    except (ValueError, RecursionError) as exc:
        logger.warning("Ignoring unparsable workout blob: %s", exc)
        return WorkoutCollection()
    if not isinstance(data, list):
        logger.warning("Ignoring workout blob: expected an array, got %s", type(data).__name__)
        return WorkoutCollection()

    out: list[Entry] = []
    for i, raw in enumerate(data):
        if not isinstance(raw, dict):
            logger.warning("Dropping workout entry %d: not an object", i + 1)
            continue
        try:
            out.append(workout_from_dict(raw))
        except MalformedPersistedEntry as exc:
            logger.warning("Keeping workout entry %d as opaque: %s", i + 1, exc)
            out.append(OpaqueEntry(payload=raw, reason=str(exc)))
    return WorkoutCollection(out)


class WorkoutStore:
    """Binds the JSON format to one key of a storage channel."""

    def __init__(self, storage: KeyValueStorage, key: str = STORAGE_KEY) -> None:
        self.storage = storage
        self.key = key

    def load(self) -> WorkoutCollection:
        try:
            blob = self.storage.get(self.key)
        except StorageUnavailable as exc:
            logger.error("Workout storage unavailable, starting empty: %s", exc)
            return WorkoutCollection()
        collection = parse_workouts(blob)
        logger.info("Loaded %d workout(s)", len(collection))
        return collection

    def save(self, collection: WorkoutCollection) -> bool:
        blob = dump_workouts(collection)
        try:
            self.storage.set(self.key, blob)
        except StorageUnavailable as exc:
            logger.error("Could not save %d workout(s): %s", len(collection), exc)
            return False
        return True

    def clear(self) -> bool:
        try:
            self.storage.remove(self.key)
        except StorageUnavailable as exc:
            logger.error("Could not clear workout storage: %s", exc)
            return False
        return True


def _finite_or_none(value: float | None) -> float | None:
    # Strict JSON has no Infinity or NaN.
    if value is None or not math.isfinite(value):
        return None
    return value


def _number(raw: object, field_name: str) -> float:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise MalformedPersistedEntry(f"Field '{field_name}' must be a number")
    try:
        value = float(raw)
    except OverflowError as exc:
        raise MalformedPersistedEntry(f"Field '{field_name}' is out of range") from exc
    if not math.isfinite(value):
        raise MalformedPersistedEntry(f"Field '{field_name}' must be finite")
    return value


def _parse_date(raw: object) -> datetime:
    if not isinstance(raw, str):
        raise MalformedPersistedEntry("Field 'date' must be an ISO 8601 string")
    text = raw.strip()
    utc_suffix = text.endswith("Z")
    if utc_suffix:
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as exc:
        raise MalformedPersistedEntry(f"Invalid date {raw!r}") from exc
    # Browser timestamps are UTC; descriptions use local month/day.
    return parsed.astimezone() if utc_suffix else parsed


def _parse_clicks(raw: object) -> int:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise MalformedPersistedEntry("Field 'clicks' must be an integer")
    if isinstance(raw, float) and not math.isfinite(raw):
        raise MalformedPersistedEntry("Field 'clicks' must be a non-negative integer")
    if raw < 0 or int(raw) != raw:
        raise MalformedPersistedEntry("Field 'clicks' must be a non-negative integer")
    return int(raw)
