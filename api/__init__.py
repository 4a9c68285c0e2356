"""
API package for the Gym Tracker session API.

This package contains:
- deps.py: FastAPI dependency providers for DI
- errors.py: Session error to HTTP status mapping
- routers/: API route handlers
"""

# Re-export dependency providers for convenient access
from api.deps import (
    get_settings,
    get_supabase_client,
    get_session_manager,
    get_workout_store,
    get_exercise_catalog,
)

__all__ = [
    # Settings
    "get_settings",
    # Database
    "get_supabase_client",
    # Session core
    "get_session_manager",
    "get_workout_store",
    "get_exercise_catalog",
]
