from __future__ import annotations

from pathlib import Path

import pytest

from mapty.workout.model import new_running
from mapty.workout.collection import WorkoutCollection
from mapty.workout.storage import FileStorage, MemoryStorage, StorageUnavailable
from mapty.workout.store import WorkoutStore


def test_file_storage_set_get_remove(tmp_path: Path) -> None:
    storage = FileStorage(tmp_path / "data")

    assert storage.get("workouts") is None

    storage.set("workouts", '[{"id": "1"}]')
    assert storage.path_for("workouts") == tmp_path / "data" / "workouts.json"
    assert storage.get("workouts") == '[{"id": "1"}]'

    storage.remove("workouts")
    assert storage.get("workouts") is None
    storage.remove("workouts")


def test_file_storage_overwrites_value(tmp_path: Path) -> None:
    storage = FileStorage(tmp_path)
    storage.set("workouts", "[]")
    storage.set("workouts", "[1]")

    assert storage.get("workouts") == "[1]"
    assert not list(tmp_path.glob("*.tmp"))


def test_file_storage_write_failure_raises_storage_unavailable(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    storage = FileStorage(blocker / "nested")

    with pytest.raises(StorageUnavailable):
        storage.set("workouts", "[]")


class _BrokenStorage(MemoryStorage):
    def get(self, key: str) -> str | None:
        raise StorageUnavailable("disk gone")

    def set(self, key: str, value: str) -> None:
        raise StorageUnavailable("disk gone")

    def remove(self, key: str) -> None:
        raise StorageUnavailable("disk gone")


def test_store_absorbs_storage_failures() -> None:
    store = WorkoutStore(_BrokenStorage())
    run = new_running((0.0, 0.0), 5, 25, 170)
    collection = WorkoutCollection([run])

    assert len(store.load()) == 0
    assert store.save(collection) is False
    assert store.clear() is False
    assert list(collection) == [run]


def test_file_storage_failed_replace_leaves_no_temp_file(tmp_path: Path) -> None:
    storage = FileStorage(tmp_path)
    storage.path_for("workouts").mkdir()

    with pytest.raises(StorageUnavailable):
        storage.set("workouts", "[]")

    assert not list(tmp_path.glob("*.tmp"))
