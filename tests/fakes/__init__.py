"""
Fake Implementations for Testing.

This package provides in-memory fake implementations of the application
ports for fast, isolated testing. No database, relay or timers required.

Features:
- All fakes implement the same Protocol interfaces as real implementations
- Supports seeding with test data
- Supports reset() for test isolation
- Failure switches for persistence and broadcaster error paths

Usage:
    from tests.fakes import FakeWorkoutStore, FakeTimeSource, ManualSessionClock

    store = FakeWorkoutStore()
    now = FakeTimeSource()
    clock = ManualSessionClock()
    manager = WorkoutSessionManager(store, clock=clock, now=now)
"""
from datetime import datetime
from typing import List, Optional

from domain.models import ExerciseSet, FailureLevel, Workout

from tests.fakes.workout_store import FakeWorkoutStore
from tests.fakes.live_status_broadcaster import FakeLiveStatusBroadcaster
from tests.fakes.exercise_catalog import (
    BENCH,
    DEADLIFT,
    SQUAT,
    FakeExerciseCatalog,
)
from tests.fakes.clock import DEFAULT_START, FakeTimeSource, ManualSessionClock


# =============================================================================
# Factory Functions
# =============================================================================


def make_workout(
    *,
    name: str = "Leg Day",
    date: datetime = DEFAULT_START,
    duration_seconds: float = 0.0,
    is_active: bool = False,
    num_sets: int = 0,
    workout_id: Optional[str] = None,
) -> Workout:
    """
    Build a Workout with `num_sets` squat sets.

    Args:
        name: Workout name
        date: Start time
        duration_seconds: Stored duration
        is_active: Active flag
        num_sets: Number of squat sets to attach
        workout_id: Optional fixed id
    """
    sets: List[ExerciseSet] = [
        ExerciseSet(
            exercise=SQUAT,
            reps=8,
            weight_kg=100,
            timestamp=date,
            elapsed_seconds=float(i * 60),
            failure_level=FailureLevel.NONE,
        )
        for i in range(num_sets)
    ]
    kwargs = {}
    if workout_id is not None:
        kwargs["id"] = workout_id
    return Workout(
        name=name,
        date=date,
        duration_seconds=duration_seconds,
        exercise_sets=sets,
        is_active=is_active,
        **kwargs,
    )


__all__ = [
    # Fakes
    "FakeWorkoutStore",
    "FakeLiveStatusBroadcaster",
    "FakeExerciseCatalog",
    "FakeTimeSource",
    "ManualSessionClock",
    # Sample data
    "SQUAT",
    "BENCH",
    "DEADLIFT",
    "DEFAULT_START",
    # Factory functions
    "make_workout",
]
