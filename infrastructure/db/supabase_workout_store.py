"""
Supabase implementation of WorkoutStore.

Table `workouts`:
    id (uuid, pk), name (text), date (timestamptz), duration_seconds (float8),
    notes (text), exercise_sets (jsonb), is_active (bool)

Every insert/delete is its own request, so save() has nothing to commit.
"""
import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError
from supabase import Client

from application.errors import PersistenceError
from domain.models import Workout

logger = logging.getLogger(__name__)

TABLE = "workouts"


def workout_to_row(workout: Workout) -> Dict[str, Any]:
    """Convert a Workout to a `workouts` row."""
    data = workout.model_dump(mode="json")
    return {
        "id": data["id"],
        "name": data["name"],
        "date": data["date"],
        "duration_seconds": data["duration_seconds"],
        "notes": data["notes"],
        "exercise_sets": data["exercise_sets"],
        "is_active": data["is_active"],
    }


def row_to_workout(row: Dict[str, Any]) -> Workout:
    """Convert a `workouts` row to a Workout. Unknown columns are ignored."""
    return Workout.model_validate(
        {
            "id": row["id"],
            "name": row["name"],
            "date": row["date"],
            "duration_seconds": row.get("duration_seconds") or 0.0,
            "notes": row.get("notes") or "",
            "exercise_sets": row.get("exercise_sets") or [],
            "is_active": bool(row.get("is_active")),
        }
    )


class SupabaseWorkoutStore:
    """
    Supabase implementation of WorkoutStore protocol.

    The client is injected via constructor for testability.
    """

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
        """
        self._client = client

    def insert(self, workout: Workout) -> None:
        try:
            self._client.table(TABLE).upsert(
                workout_to_row(workout), on_conflict="id"
            ).execute()
        except Exception as e:
            logger.error(f"Failed to upsert workout {workout.id}: {e}")
            raise PersistenceError(f"Failed to save workout {workout.id}: {e}") from e

    def delete(self, workout: Workout) -> bool:
        try:
            result = self._client.table(TABLE) \
                .delete() \
                .eq("id", workout.id) \
                .execute()
        except Exception as e:
            logger.error(f"Failed to delete workout {workout.id}: {e}")
            raise PersistenceError(f"Failed to delete workout {workout.id}: {e}") from e
        return bool(result.data)

    def fetch(self, workout_id: str) -> Optional[Workout]:
        try:
            result = self._client.table(TABLE) \
                .select("*") \
                .eq("id", workout_id) \
                .limit(1) \
                .execute()
        except Exception as e:
            logger.error(f"Failed to get workout {workout_id}: {e}")
            raise PersistenceError(f"Failed to get workout {workout_id}: {e}") from e
        if not result.data:
            return None
        return self._to_workout(result.data[0])

    def fetch_active(self) -> Optional[Workout]:
        try:
            result = self._client.table(TABLE) \
                .select("*") \
                .eq("is_active", True) \
                .order("date", desc=True) \
                .limit(1) \
                .execute()
        except Exception as e:
            logger.error(f"Failed to get active workout: {e}")
            raise PersistenceError(f"Failed to get active workout: {e}") from e
        if not result.data:
            return None
        return self._to_workout(result.data[0])

    def fetch_all(self, sort_by_date_desc: bool = True) -> List[Workout]:
        try:
            result = self._client.table(TABLE) \
                .select("*") \
                .order("date", desc=sort_by_date_desc) \
                .execute()
        except Exception as e:
            logger.error(f"Failed to list workouts: {e}")
            raise PersistenceError(f"Failed to list workouts: {e}") from e
        return [self._to_workout(row) for row in result.data or []]

    def save(self) -> None:
        """No-op; each call above is already committed."""

    def _to_workout(self, row: Dict[str, Any]) -> Workout:
        try:
            return row_to_workout(row)
        except (KeyError, ValidationError) as e:
            logger.error(f"Malformed workout row {row.get('id')}: {e}")
            raise PersistenceError(f"Malformed workout row {row.get('id')}: {e}") from e
