"""
YAML implementation of ExerciseCatalog.

Reads shared/dictionaries/exercises.yaml once at construction.
"""
import logging
import pathlib
from typing import Dict, List, Optional

import yaml
from pydantic import ValidationError

from domain.models import Exercise

logger = logging.getLogger(__name__)

ROOT = pathlib.Path(__file__).resolve().parents[2]
DEFAULT_CATALOG_PATH = ROOT / "shared/dictionaries/exercises.yaml"


class CatalogLoadError(Exception):
    """Raised when the catalog file is missing or malformed."""


class YamlExerciseCatalog:
    """
    Read-only exercise catalog backed by a YAML file.

    Expected layout:

        exercises:
          - id: barbell-back-squat
            name: Barbell Back Squat
            muscle: Quadriceps
            group: Legs
            notes: [...]
    """

    def __init__(self, path: pathlib.Path = DEFAULT_CATALOG_PATH):
        self._path = pathlib.Path(path)
        self._exercises: List[Exercise] = self._load()
        self._by_id: Dict[str, Exercise] = {e.id: e for e in self._exercises}
        self._by_name: Dict[str, Exercise] = {
            e.name.casefold(): e for e in self._exercises
        }

    def _load(self) -> List[Exercise]:
        try:
            data = yaml.safe_load(self._path.read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError) as e:
            raise CatalogLoadError(f"Cannot read exercise catalog {self._path}: {e}") from e

        items = data.get("exercises", []) if isinstance(data, dict) else data
        exercises: List[Exercise] = []
        seen = set()
        for item in items or []:
            try:
                exercise = Exercise.model_validate(item)
            except ValidationError as e:
                raise CatalogLoadError(f"Invalid catalog entry {item!r}: {e}") from e
            if exercise.id in seen:
                raise CatalogLoadError(f"Duplicate exercise id '{exercise.id}' in catalog")
            seen.add(exercise.id)
            exercises.append(exercise)

        logger.info(f"Loaded {len(exercises)} exercises from {self._path}")
        return exercises

    def get_all(self) -> List[Exercise]:
        return list(self._exercises)

    def get_by_id(self, exercise_id: str) -> Optional[Exercise]:
        return self._by_id.get(exercise_id)

    def find_by_name(self, name: str) -> Optional[Exercise]:
        return self._by_name.get(name.strip().casefold())

    def groups(self) -> List[str]:
        seen: List[str] = []
        for exercise in self._exercises:
            if exercise.group and exercise.group not in seen:
                seen.append(exercise.group)
        return seen
