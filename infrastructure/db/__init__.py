"""
Infrastructure Storage Layer.

WorkoutStore implementations:
- JsonFileWorkoutStore: single JSON document on local disk (default)
- SupabaseWorkoutStore: `workouts` table in Supabase

Usage:
    from supabase import create_client
    from infrastructure.db import JsonFileWorkoutStore, SupabaseWorkoutStore

    store = JsonFileWorkoutStore.in_directory(pathlib.Path("data"))

    client = create_client(SUPABASE_URL, SUPABASE_KEY)
    store = SupabaseWorkoutStore(client)
"""

from infrastructure.db.json_file_workout_store import JsonFileWorkoutStore
from infrastructure.db.supabase_workout_store import SupabaseWorkoutStore

__all__ = [
    "JsonFileWorkoutStore",
    "SupabaseWorkoutStore",
]
