"""
Health check router.

This router provides health check endpoints for monitoring and load balancers.
"""

import logging

from fastapi import APIRouter, Depends

from api.deps import get_session_manager
from application.services import WorkoutSessionManager

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Health"],
)


@router.get("/health")
def health():
    """
    Simple liveness endpoint.

    Returns:
        dict: Status indicator for health checks
    """
    return {"status": "ok"}


@router.get("/health/session")
def session_health(manager: WorkoutSessionManager = Depends(get_session_manager)):
    """Report the session state without exposing workout contents."""
    return {
        "status": "ok",
        "session_state": manager.state.value,
        "live_activity": manager.has_live_activity,
    }
