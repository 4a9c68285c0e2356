"""
Collaborator Interfaces (Ports) for the Gym Tracker session API.

This package defines abstract interfaces that decouple the session core from
infrastructure (storage, live activity surfaces, catalog data files).
Implementations are provided in the infrastructure layer and in tests/fakes.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the session core needs)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import WorkoutStore, LiveStatusBroadcaster

    class WorkoutSessionManager:
        def __init__(self, store: WorkoutStore, broadcaster: LiveStatusBroadcaster):
            self._store = store
            self._broadcaster = broadcaster
"""

# Workout persistence
from application.ports.workout_store import WorkoutStore

# Live activity surface
from application.ports.live_status_broadcaster import LiveStatusBroadcaster

# Exercise reference data
from application.ports.exercise_catalog import ExerciseCatalog

__all__ = [
    "WorkoutStore",
    "LiveStatusBroadcaster",
    "ExerciseCatalog",
]
