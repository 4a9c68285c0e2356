"""
Workout Store Interface (Port).

This module defines the abstract interface for workout persistence.
Implementations may use a local JSON file, Supabase, or in-memory storage.
"""
from typing import List, Optional, Protocol

from domain.models import Workout


class WorkoutStore(Protocol):
    """
    Abstract interface for workout persistence operations.

    The store holds copies: nothing it returns aliases an object handed to
    insert(), and nothing handed to insert() is retained by reference.
    Each call is transactional; partial writes are never visible.

    All methods raise PersistenceError on backend failure.
    """

    def insert(self, workout: Workout) -> None:
        """
        Insert a workout record, replacing any record with the same id.

        Args:
            workout: Workout to store (a copy is kept)
        """
        ...

    def delete(self, workout: Workout) -> bool:
        """
        Delete the record with the workout's id.

        Args:
            workout: Workout whose record should be removed

        Returns:
            True if a record was deleted, False if none existed
        """
        ...

    def fetch(self, workout_id: str) -> Optional[Workout]:
        """
        Get a single workout by ID.

        Args:
            workout_id: Workout UUID

        Returns:
            Workout copy or None if not found
        """
        ...

    def fetch_active(self) -> Optional[Workout]:
        """
        Get the active workout record, if any.

        Backs cold-start recovery. When more than one active record exists
        (after a crash mid-transition) the newest by date is returned.

        Returns:
            Active Workout copy or None
        """
        ...

    def fetch_all(self, sort_by_date_desc: bool = True) -> List[Workout]:
        """
        Get every stored workout.

        Args:
            sort_by_date_desc: Newest first when True, oldest first otherwise

        Returns:
            List of Workout copies
        """
        ...

    def save(self) -> None:
        """Commit pending writes."""
        ...
