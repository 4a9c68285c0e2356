"""
Domain models for the Gym Tracker session API.

This package contains pure domain models that are independent of
infrastructure concerns (storage, HTTP, live activity surfaces).

These models represent the core business concepts:
- Workout: The aggregate root; one active session or a completed record
- ExerciseSet: A single logged set of an exercise
- Exercise: Catalog reference data
- Weight: Input weight value object (kg or lb, stored as kg)
- LiveStatusSnapshot: What the live activity surface is shown

Usage:
    >>> from datetime import datetime, timezone
    >>> from domain.models import Workout, ExerciseSet, Exercise, FailureLevel

    >>> squat = Exercise(id="barbell-back-squat", name="Squat", group="Legs")
    >>> workout = Workout.begin(datetime.now(timezone.utc), name="Leg Day")
    >>> workout.exercise_sets.append(
    ...     ExerciseSet(
    ...         exercise=squat,
    ...         reps=8,
    ...         weight_kg=100,
    ...         timestamp=datetime.now(timezone.utc),
    ...         failure_level=FailureLevel.NONE,
    ...     )
    ... )

    >>> # Serialize to JSON
    >>> json_str = workout.model_dump_json(indent=2)

    >>> # Deserialize from JSON
    >>> workout = Workout.model_validate_json(json_str)
"""

from domain.models.exercise import Exercise
from domain.models.exercise_set import ExerciseSet, FailureLevel
from domain.models.live_status import LiveStatusSnapshot, SessionStatus
from domain.models.weight import Weight
from domain.models.workout import Workout

__all__ = [
    # Main entities
    "Workout",
    "ExerciseSet",
    "Exercise",
    "Weight",
    "LiveStatusSnapshot",
    # Enums
    "FailureLevel",
    "SessionStatus",
]
