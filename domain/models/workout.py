"""
Workout aggregate root - the main domain entity.

A Workout is either the single active session (is_active=True), mutated in
place by the session manager, or a completed record owned by the store.
"""

import uuid
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from domain.models.exercise_set import ExerciseSet


DEFAULT_NAME_FORMAT = "Workout %Y-%m-%d %H:%M"


class Workout(BaseModel):
    """
    Aggregate root representing one workout session.

    A Workout contains:
    - Identity (id, name)
    - Timing (date = start time, duration_seconds)
    - Notes
    - Ordered exercise sets (insertion order is chronological)
    - The is_active flag; at most one workout is active process-wide

    Examples:
        >>> from datetime import datetime, timezone
        >>> workout = Workout(name="Leg Day", date=datetime.now(timezone.utc))
        >>> workout.set_count
        0

        >>> json_str = workout.model_dump_json()
        >>> Workout.model_validate_json(json_str).name
        'Leg Day'
    """

    # Identity
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str = Field(..., min_length=1, max_length=200, description="Workout name")

    # Timing
    date: datetime = Field(..., description="When the workout started")
    duration_seconds: float = Field(
        default=0.0, ge=0, description="Elapsed seconds; frozen once completed"
    )

    notes: str = Field(default="", max_length=2000, description="Free-text notes")

    exercise_sets: List[ExerciseSet] = Field(default_factory=list)

    is_active: bool = Field(default=False)

    model_config = {"validate_assignment": True}

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Names are stored stripped and must not be blank."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("Workout name must not be blank")
        return stripped

    @classmethod
    def default_name(cls, date: datetime) -> str:
        """Timestamp-derived name used when the user does not supply one."""
        return date.strftime(DEFAULT_NAME_FORMAT)

    @classmethod
    def begin(
        cls,
        date: datetime,
        *,
        name: Optional[str] = None,
        notes: str = "",
    ) -> "Workout":
        """
        Create a fresh active workout starting at `date`.

        Args:
            date: Session start time.
            name: Optional name; defaults to a timestamp-derived name.
            notes: Optional notes.

        Returns:
            New active Workout with no sets and zero duration.
        """
        if name is None or not name.strip():
            name = cls.default_name(date)
        return cls(
            name=name,
            date=date,
            duration_seconds=0.0,
            notes=notes,
            exercise_sets=[],
            is_active=True,
        )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def set_count(self) -> int:
        return len(self.exercise_sets)

    @property
    def last_exercise_name(self) -> Optional[str]:
        """Name of the exercise in the most recent set, if any."""
        if not self.exercise_sets:
            return None
        return self.exercise_sets[-1].exercise.name

    @property
    def started_at_utc(self) -> datetime:
        """Start time as an aware UTC datetime (naive values are assumed UTC)."""
        if self.date.tzinfo is None:
            return self.date.replace(tzinfo=timezone.utc)
        return self.date.astimezone(timezone.utc)

    # -------------------------------------------------------------------------
    # Set lookup
    # -------------------------------------------------------------------------

    def index_of_set(self, set_id: str) -> int:
        """
        Position of the set with `set_id`.

        Raises:
            KeyError: If no set has that id.
        """
        for i, exercise_set in enumerate(self.exercise_sets):
            if exercise_set.id == set_id:
                return i
        raise KeyError(set_id)

    # -------------------------------------------------------------------------
    # Copies
    # -------------------------------------------------------------------------

    def snapshot(self) -> "Workout":
        """
        Return an independent deep copy.

        Readers and the store only ever receive snapshots, never the live
        object the session manager mutates.
        """
        return self.model_copy(deep=True)

    def completed(self, duration_seconds: float) -> "Workout":
        """
        Return a completed copy with the duration frozen.

        Args:
            duration_seconds: Final elapsed time.

        Returns:
            Deep copy with is_active=False.
        """
        return self.model_copy(
            deep=True,
            update={
                "is_active": False,
                "duration_seconds": max(self.duration_seconds, duration_seconds),
            },
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Workout):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
