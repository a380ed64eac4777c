from __future__ import annotations

from mapty.workout.collection import OpaqueEntry, WorkoutCollection
from mapty.workout.model import new_cycling, new_running
from mapty.workout.store import dump_workouts, parse_workouts


def test_append_keeps_insertion_order() -> None:
    collection = WorkoutCollection()
    first = new_running((0.0, 0.0), 5, 25, 170)
    second = new_cycling((0.0, 0.0), 20, 60, 150)

    collection.append(first)
    collection.append(second)

    assert len(collection) == 2
    assert list(collection) == [first, second]
    assert collection.workouts() == [first, second]


def test_find_by_id() -> None:
    run = new_running((0.0, 0.0), 5, 25, 170)
    collection = WorkoutCollection([run])

    assert collection.find_by_id(run.id) is run
    assert collection.find_by_id("missing") is None


def test_increment_clicks_on_loaded_collection_survives_round_trip() -> None:
    run = new_running((0.0, 0.0), 5, 25, 170, workout_id="0000000001")
    ride = new_cycling((1.0, 1.0), 20, 60, 150, workout_id="0000000002")
    loaded = parse_workouts(dump_workouts(WorkoutCollection([run, ride])))

    found = loaded.find_by_id("0000000002")
    assert found is not None and found.id == "0000000002"

    clicked = loaded.increment_clicks("0000000002")
    assert clicked is found
    assert clicked.clicks == 1

    reloaded = parse_workouts(dump_workouts(loaded))
    again = reloaded.find_by_id("0000000002")
    assert again is not None and again.clicks == 1
    first = reloaded.find_by_id("0000000001")
    assert first is not None and first.clicks == 0


def test_increment_clicks_missing_or_opaque_is_noop() -> None:
    opaque = OpaqueEntry(payload={"id": "x", "type": "unknown"})
    collection = WorkoutCollection([opaque])

    assert collection.increment_clicks("missing") is None
    assert collection.increment_clicks("x") is None
    assert collection.find_by_id("x") is opaque
    assert collection.workouts() == []
