"""
ExerciseSet entity and FailureLevel enum.

A set is one logged effort of an exercise during an active workout.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from domain.models.exercise import Exercise


class FailureLevel(str, Enum):
    """How close to muscular failure a set was taken."""

    NONE = "none"
    MILD_DISCOMFORT = "mild_discomfort"
    NEAR_FAILURE = "near_failure"
    COMPLETE_FAILURE = "complete_failure"

    @property
    def description(self) -> str:
        return _FAILURE_DESCRIPTIONS[self]


_FAILURE_DESCRIPTIONS = {
    FailureLevel.NONE: "No Failure",
    FailureLevel.MILD_DISCOMFORT: "Mild Discomfort",
    FailureLevel.NEAR_FAILURE: "Almost Failure",
    FailureLevel.COMPLETE_FAILURE: "Complete Failure",
}


class ExerciseSet(BaseModel):
    """
    Entity representing a single logged set.

    The exercise is shared reference data; the set owns only its own
    measurements. Identity is the `id` field, so two sets with the same
    reps and weight are still different sets.

    Examples:
        >>> from datetime import datetime, timezone
        >>> squat = Exercise(id="squat", name="Squat", group="Legs")
        >>> s = ExerciseSet(
        ...     exercise=squat,
        ...     reps=8,
        ...     weight_kg=102.5,
        ...     timestamp=datetime.now(timezone.utc),
        ...     elapsed_seconds=42.0,
        ... )
        >>> str(s)
        'Squat 8x102.5kg'
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    exercise: Exercise
    reps: int = Field(..., ge=0, strict=True, description="Repetitions performed")
    weight_kg: float = Field(..., ge=0, description="Weight in kilograms")
    timestamp: datetime = Field(..., description="When the set was captured")
    elapsed_seconds: float = Field(
        default=0.0,
        ge=0,
        description="Seconds since the workout started when the set was captured",
    )
    failure_level: FailureLevel = Field(default=FailureLevel.NONE)

    model_config = {"validate_assignment": True}

    def duplicate(self, timestamp: datetime, elapsed_seconds: float) -> "ExerciseSet":
        """
        Return a copy of this set with a fresh identity and capture time.

        Exercise, reps, weight and failure level are carried over.

        Args:
            timestamp: Capture time of the new set.
            elapsed_seconds: Seconds since workout start at `timestamp`.

        Returns:
            New ExerciseSet.
        """
        return ExerciseSet(
            exercise=self.exercise,
            reps=self.reps,
            weight_kg=self.weight_kg,
            timestamp=timestamp,
            elapsed_seconds=max(0.0, elapsed_seconds),
            failure_level=self.failure_level,
        )

    def with_changes(
        self,
        *,
        exercise: Optional[Exercise] = None,
        reps: Optional[int] = None,
        weight_kg: Optional[float] = None,
        failure_level: Optional[FailureLevel] = None,
    ) -> "ExerciseSet":
        """
        Return a validated copy with the given fields replaced.

        Identity, timestamp and elapsed time are preserved.
        """
        data = self.model_dump()
        data["exercise"] = exercise if exercise is not None else self.exercise
        if reps is not None:
            data["reps"] = reps
        if weight_kg is not None:
            data["weight_kg"] = weight_kg
        if failure_level is not None:
            data["failure_level"] = failure_level
        return ExerciseSet.model_validate(data)

    def __str__(self) -> str:
        text = f"{self.exercise.name} {self.reps}x{self.weight_kg}kg"
        if self.failure_level != FailureLevel.NONE:
            text += f" ({self.failure_level.description})"
        return text
