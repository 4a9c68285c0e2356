"""
Domain layer for the Gym Tracker session API.

This package contains pure domain models that are independent of
infrastructure concerns (storage, HTTP, live activity surfaces).
"""

from domain.models import (
    Exercise,
    ExerciseSet,
    FailureLevel,
    LiveStatusSnapshot,
    SessionStatus,
    Weight,
    Workout,
)

__all__ = [
    "Exercise",
    "ExerciseSet",
    "FailureLevel",
    "LiveStatusSnapshot",
    "SessionStatus",
    "Weight",
    "Workout",
]
