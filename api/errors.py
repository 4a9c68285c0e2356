"""
Translation of session core errors into HTTP errors.

    WorkoutValidationError -> 422
    SetNotFoundError       -> 404
    SessionStateError      -> 409
    PersistenceError       -> 503
"""

import logging

from fastapi import HTTPException

from application.errors import (
    PersistenceError,
    SessionError,
    SessionStateError,
    SetNotFoundError,
    WorkoutValidationError,
)

logger = logging.getLogger(__name__)


def http_error(exc: SessionError) -> HTTPException:
    """Map a SessionError to the HTTPException a router should raise."""
    if isinstance(exc, SetNotFoundError):
        return HTTPException(status_code=404, detail=exc.message)
    if isinstance(exc, WorkoutValidationError):
        return HTTPException(
            status_code=422,
            detail={"message": exc.message, "errors": exc.errors},
        )
    if isinstance(exc, SessionStateError):
        return HTTPException(status_code=409, detail=exc.message)
    if isinstance(exc, PersistenceError):
        logger.error(f"Workout store unavailable: {exc.message}")
        return HTTPException(status_code=503, detail=exc.message)
    logger.error(f"Unhandled session error: {exc.message}")
    return HTTPException(status_code=500, detail=exc.message)
