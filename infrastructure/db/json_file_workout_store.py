"""
Local JSON file implementation of WorkoutStore.

All workouts live in one JSON document:

    {"version": 1, "workouts": [<Workout.model_dump(mode="json")>, ...]}

insert() and delete() stage changes in memory; save() commits the staged
document with tempfile + os.replace() so the file on disk is always either
the previous commit or the new one, never a partial write. A failed save()
drops the staged changes, so memory and disk agree again.
"""
import json
import logging
import os
import pathlib
import tempfile
import threading
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from application.errors import PersistenceError
from domain.models import Workout

logger = logging.getLogger(__name__)

DOCUMENT_VERSION = 1
DEFAULT_FILENAME = "workouts.json"


class JsonFileWorkoutStore:
    """
    JSON file implementation of WorkoutStore protocol.

    Records are held as JSON-ready dicts, so every read builds a fresh
    Workout and nothing returned aliases the stored state. Reads see staged
    (uncommitted) changes.
    """

    def __init__(self, path: pathlib.Path):
        """
        Initialize and load the committed document.

        Args:
            path: Location of the JSON document (created on first save)

        Raises:
            PersistenceError: If an existing document cannot be read or parsed
        """
        self._path = pathlib.Path(path)
        self._lock = threading.Lock()
        self._records: Dict[str, Dict[str, Any]] = self._load()
        self._committed = dict(self._records)
        self._dirty = False

    @classmethod
    def in_directory(cls, data_dir: pathlib.Path) -> "JsonFileWorkoutStore":
        return cls(pathlib.Path(data_dir) / DEFAULT_FILENAME)

    @property
    def path(self) -> pathlib.Path:
        return self._path

    @property
    def has_pending_changes(self) -> bool:
        return self._dirty

    def _load(self) -> Dict[str, Dict[str, Any]]:
        if not self._path.exists():
            logger.info(f"No workout file at {self._path}; starting empty")
            return {}
        try:
            document = json.loads(self._path.read_text(encoding="utf-8"))
            records = document.get("workouts", [])
            # Validate every record up front so a bad file fails at startup.
            workouts = [Workout.model_validate(r) for r in records]
        except (OSError, ValueError, AttributeError, ValidationError) as e:
            logger.error(f"Failed to load workouts from {self._path}: {e}")
            raise PersistenceError(f"Cannot read workout file {self._path}: {e}") from e
        logger.info(f"Loaded {len(workouts)} workouts from {self._path}")
        return {w.id: w.model_dump(mode="json") for w in workouts}

    def insert(self, workout: Workout) -> None:
        """Stage an upsert of the workout record."""
        record = workout.model_dump(mode="json")
        with self._lock:
            self._records[workout.id] = record
            self._dirty = True

    def delete(self, workout: Workout) -> bool:
        """Stage removal of the workout record."""
        with self._lock:
            removed = self._records.pop(workout.id, None) is not None
            if removed:
                self._dirty = True
            return removed

    def fetch(self, workout_id: str) -> Optional[Workout]:
        with self._lock:
            record = self._records.get(workout_id)
        if record is None:
            return None
        return Workout.model_validate(record)

    def fetch_active(self) -> Optional[Workout]:
        active = [w for w in self.fetch_all(sort_by_date_desc=True) if w.is_active]
        return active[0] if active else None

    def fetch_all(self, sort_by_date_desc: bool = True) -> List[Workout]:
        with self._lock:
            records = list(self._records.values())
        workouts = [Workout.model_validate(r) for r in records]
        workouts.sort(key=lambda w: w.started_at_utc, reverse=sort_by_date_desc)
        return workouts

    def save(self) -> None:
        """
        Commit staged changes to disk atomically.

        Raises:
            PersistenceError: If the directory or file cannot be written.
                Staged changes are rolled back to the last commit.
        """
        with self._lock:
            if not self._dirty:
                return
            document = {
                "version": DOCUMENT_VERSION,
                "workouts": list(self._records.values()),
            }
            try:
                self._write_atomically(document)
            except PersistenceError:
                self._records = dict(self._committed)
                self._dirty = False
                raise
            self._committed = dict(self._records)
            self._dirty = False

    def _write_atomically(self, document: Dict[str, Any]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Cannot create data directory {self._path.parent}: {e}")
            raise PersistenceError(
                f"Cannot create data directory {self._path.parent}: {e}"
            ) from e

        tmp_path = None
        try:
            with tempfile.NamedTemporaryFile(
                mode="w",
                dir=str(self._path.parent),
                suffix=".json",
                delete=False,
                encoding="utf-8",
            ) as tmp_file:
                tmp_path = tmp_file.name
                json.dump(document, tmp_file, indent=2)

            os.replace(tmp_path, str(self._path))
        except OSError as e:
            if tmp_path is not None:
                try:
                    os.unlink(tmp_path)
                except OSError:
                    pass
            logger.error(f"Failed to write workouts to {self._path}: {e}")
            raise PersistenceError(f"Failed to write workout file: {e}") from e
