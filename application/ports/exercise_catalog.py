"""
Exercise Catalog Interface (Port).

Read-only exercise reference data, loaded once at process start. The session
manager only uses it to resolve exercise ids passed to add_set/edit_set.
"""
from typing import List, Optional, Protocol

from domain.models import Exercise


class ExerciseCatalog(Protocol):
    """Abstract interface for looking up catalog exercises."""

    def get_all(self) -> List[Exercise]:
        """
        Get all exercises in catalog order.

        Returns:
            List of exercises
        """
        ...

    def get_by_id(self, exercise_id: str) -> Optional[Exercise]:
        """
        Get an exercise by its catalog id.

        Args:
            exercise_id: The exercise id (e.g., "barbell-back-squat")

        Returns:
            Exercise or None if not found
        """
        ...

    def find_by_name(self, name: str) -> Optional[Exercise]:
        """
        Find an exercise by exact name (case-insensitive).

        Args:
            name: Exercise name

        Returns:
            Exercise or None if not found
        """
        ...

    def groups(self) -> List[str]:
        """Distinct group labels in first-seen order."""
        ...
