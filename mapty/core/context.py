"""Application context shared by the UI and the launcher."""

from __future__ import annotations

import logging

from mapty.workout.collection import Entry, WorkoutCollection
from mapty.workout.creation import create_workout
from mapty.workout.model import Workout
from mapty.workout.storage import KeyValueStorage
from mapty.workout.store import STORAGE_KEY, WorkoutStore

logger = logging.getLogger(__name__)


class MaptyContext:
    def __init__(self, storage: KeyValueStorage, key: str = STORAGE_KEY) -> None:
        self._store = WorkoutStore(storage, key=key)
        self.collection = WorkoutCollection()
        self.initial_coords: tuple[float, float] | None = None
        self.last_save_ok = True

    def load(self) -> WorkoutCollection:
        self.collection = self._store.load()
        return self.collection

    def log_workout(
        self,
        *,
        kind: str,
        coords: object,
        distance: object,
        duration: object,
        cadence: object = None,
        elevation_gain: object = None,
    ) -> Workout:
        workout = create_workout(
            kind=kind,
            coords=coords,
            distance=distance,
            duration=duration,
            cadence=cadence,
            elevation_gain=elevation_gain,
        )
        self.collection.append(workout)
        logger.info("Logged %s (%s)", workout.description, workout.id)
        self._save()
        return workout

    def find(self, workout_id: str) -> Entry | None:
        return self.collection.find_by_id(workout_id)

    def select(self, workout_id: str) -> Workout | None:
        workout = self.collection.increment_clicks(workout_id)
        if workout is None:
            logger.debug("Select ignored, no workout with id %s", workout_id)
            return None
        self._save()
        return workout

    def reset(self) -> bool:
        cleared = self._store.clear()
        self.collection = WorkoutCollection()
        return cleared

    def _save(self) -> None:
        self.last_save_ok = self._store.save(self.collection)
