"""
Router package for the Gym Tracker session API.

This package contains all API routers organized by domain:
- health: Health check endpoints
- session: Active workout lifecycle and set mutations
- workouts: Persisted workout history
- exercises: Exercise catalog lookup
"""

from api.routers.health import router as health_router
from api.routers.session import router as session_router
from api.routers.workouts import router as workouts_router
from api.routers.exercises import router as exercises_router

__all__ = [
    "health_router",
    "session_router",
    "workouts_router",
    "exercises_router",
]
