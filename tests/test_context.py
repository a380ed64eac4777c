from __future__ import annotations

from pathlib import Path

import pytest

from mapty.core.context import MaptyContext
from mapty.workout.creation import InvalidInput
from mapty.workout.model import Workout
from mapty.workout.storage import FileStorage, MemoryStorage, StorageUnavailable


def test_log_workout_appends_and_persists(tmp_path: Path) -> None:
    context = MaptyContext(FileStorage(tmp_path))
    context.load()

    run = context.log_workout(
        kind="running",
        coords=(52.37, 4.89),
        distance="5",
        duration="24",
        cadence="180",
    )
    ride = context.log_workout(
        kind="cycling",
        coords=(52.38, 4.9),
        distance="5",
        duration="24",
        elevation_gain="-3",
    )

    assert len(context.collection) == 2
    assert context.last_save_ok is True

    restarted = MaptyContext(FileStorage(tmp_path))
    loaded = restarted.load()
    assert [entry.id for entry in loaded] == [run.id, ride.id]
    loaded_ride = restarted.find(ride.id)
    assert isinstance(loaded_ride, Workout)
    assert loaded_ride.speed == 12.5


def test_invalid_input_leaves_collection_untouched() -> None:
    storage = MemoryStorage()
    context = MaptyContext(storage)

    with pytest.raises(InvalidInput):
        context.log_workout(
            kind="running",
            coords=(0.0, 0.0),
            distance=-1,
            duration=5,
            cadence=10,
        )

    assert len(context.collection) == 0
    assert storage.data == {}


def test_select_increments_clicks_and_saves() -> None:
    storage = MemoryStorage()
    context = MaptyContext(storage)
    run = context.log_workout(
        kind="running", coords=(0.0, 0.0), distance=3, duration=18, cadence=170
    )

    assert context.select(run.id) is run
    assert context.select("missing") is None

    reloaded = MaptyContext(storage)
    reloaded.load()
    found = reloaded.find(run.id)
    assert isinstance(found, Workout)
    assert found.clicks == 1


def test_reset_clears_storage_and_collection() -> None:
    storage = MemoryStorage()
    context = MaptyContext(storage)
    context.log_workout(kind="cycling", coords=(0.0, 0.0), distance=10, duration=30, elevation_gain=0)

    assert context.reset() is True
    assert len(context.collection) == 0
    assert storage.data == {}


class _ReadOnlyStorage(MemoryStorage):
    def set(self, key: str, value: str) -> None:
        raise StorageUnavailable("read-only")


def test_save_failure_keeps_in_memory_collection() -> None:
    context = MaptyContext(_ReadOnlyStorage())

    run = context.log_workout(
        kind="running", coords=(0.0, 0.0), distance=5, duration=25, cadence=170
    )

    assert context.last_save_ok is False
    assert list(context.collection) == [run]
    assert context.select(run.id) is run
    assert run.clicks == 1
