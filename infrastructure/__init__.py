"""
Infrastructure Layer for the Gym Tracker session API.

This package contains concrete implementations of the application ports:
- db/: WorkoutStore adapters (local JSON file, Supabase)
- catalog/: ExerciseCatalog adapter (bundled YAML)
- broadcast/: LiveStatusBroadcaster adapter (HTTP relay)
"""

from infrastructure.db import JsonFileWorkoutStore, SupabaseWorkoutStore
from infrastructure.catalog import YamlExerciseCatalog
from infrastructure.broadcast import HttpLiveStatusBroadcaster, build_broadcaster

__all__ = [
    "JsonFileWorkoutStore",
    "SupabaseWorkoutStore",
    "YamlExerciseCatalog",
    "HttpLiveStatusBroadcaster",
    "build_broadcaster",
]
