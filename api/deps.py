"""
FastAPI Dependency Providers for the Gym Tracker session API.

This module provides FastAPI dependency injection functions that return
interface types (Protocols) rather than concrete implementations. This
enables clean separation of concerns and easy testing with fake implementations.

Architecture:
- Settings and Supabase client are cached per-process (lru_cache)
- The session manager, store and catalog are built once at startup
  (backend.main lifespan) and read from app.state per request

Usage in routers:
    from api.deps import get_session_manager
    from application.services import WorkoutSessionManager

    @router.get("/session")
    def get_session(manager: WorkoutSessionManager = Depends(get_session_manager)):
        return manager.active_snapshot()

Testing:
    # Inject fakes through the app factory
    app = create_app(settings, store=FakeWorkoutStore(), catalog=FakeExerciseCatalog())
"""

from functools import lru_cache
from typing import Optional

from fastapi import HTTPException, Request
from supabase import Client, create_client

from application.ports import ExerciseCatalog, WorkoutStore
from application.services import WorkoutSessionManager
from backend.settings import Settings, get_settings as _get_settings


# =============================================================================
# Settings Provider
# =============================================================================


def get_settings() -> Settings:
    """
    Get application settings.

    Returns cached Settings instance from backend.settings.
    Use this as a FastAPI dependency for settings access.

    Returns:
        Settings: Application settings instance
    """
    return _get_settings()


# =============================================================================
# Supabase Client Provider
# =============================================================================


@lru_cache
def get_supabase_client() -> Optional[Client]:
    """
    Get Supabase client instance (cached).

    Returns None if credentials are not configured.
    """
    settings = _get_settings()

    if not settings.supabase_url or not settings.supabase_key:
        return None

    return create_client(settings.supabase_url, settings.supabase_key)


# =============================================================================
# Session Core Providers
# =============================================================================


def _state_attr(request: Request, name: str):
    value = getattr(request.app.state, name, None)
    if value is None:
        raise HTTPException(status_code=503, detail="Session service is not ready")
    return value


def get_session_manager(request: Request) -> WorkoutSessionManager:
    """Get the process-wide WorkoutSessionManager."""
    return _state_attr(request, "session_manager")


def get_workout_store(request: Request) -> WorkoutStore:
    """Get the WorkoutStore the session manager writes to."""
    return _state_attr(request, "workout_store")


def get_exercise_catalog(request: Request) -> ExerciseCatalog:
    """Get the loaded ExerciseCatalog."""
    return _state_attr(request, "exercise_catalog")


__all__ = [
    "get_settings",
    "get_supabase_client",
    "get_session_manager",
    "get_workout_store",
    "get_exercise_catalog",
]
