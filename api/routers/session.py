"""
Session router for the active workout.

This router contains endpoints for:
- /session - Get or update (name, notes) the active workout
- /session/start, /session/end, /session/discard - Lifecycle
- /session/sets - Add a set
- /session/sets/{set_id} - Edit or remove a set
- /session/sets/{set_id}/duplicate - Duplicate a set

Every endpoint delegates to the process-wide WorkoutSessionManager, which
serializes the calls with the session clock.
"""

import logging
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from api.deps import get_session_manager
from api.errors import http_error
from application.errors import SessionError
from application.services import WorkoutSessionManager
from domain.models import ExerciseSet, FailureLevel, Workout

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/session",
    tags=["Session"],
)


# =============================================================================
# Request/Response Models
# =============================================================================


class StartSessionRequest(BaseModel):
    """Request for starting a workout."""
    name: Optional[str] = None
    notes: str = ""


class UpdateSessionRequest(BaseModel):
    """Request for renaming the active workout or replacing its notes."""
    name: Optional[str] = None
    notes: Optional[str] = None


class AddSetRequest(BaseModel):
    """Request for logging a set."""
    exercise_id: str = Field(..., description="Catalog exercise id or name")
    reps: int
    weight: float
    unit: Literal["kg", "lb"] = "kg"
    failure_level: FailureLevel = FailureLevel.NONE


class EditSetRequest(BaseModel):
    """Request for editing a set. Omitted fields are left unchanged."""
    exercise_id: Optional[str] = None
    reps: Optional[int] = None
    weight: Optional[float] = None
    unit: Literal["kg", "lb"] = "kg"
    failure_level: Optional[FailureLevel] = None


# =============================================================================
# Endpoints
# =============================================================================


@router.get("", response_model=Workout)
async def get_session(manager: WorkoutSessionManager = Depends(get_session_manager)):
    """Get a snapshot of the active workout."""
    snapshot = manager.active_snapshot()
    if snapshot is None:
        raise HTTPException(status_code=404, detail="No active workout")
    return snapshot


@router.post("/start", response_model=Workout, status_code=201)
async def start_session(
    request: StartSessionRequest,
    manager: WorkoutSessionManager = Depends(get_session_manager),
):
    """Start a workout. An already active workout is ended first unless disabled."""
    try:
        return await manager.start_workout(name=request.name, notes=request.notes)
    except SessionError as e:
        raise http_error(e) from e


@router.patch("", response_model=Workout)
async def update_session(
    request: UpdateSessionRequest,
    manager: WorkoutSessionManager = Depends(get_session_manager),
):
    """Rename the active workout and/or replace its notes."""
    try:
        return await manager.update_details(name=request.name, notes=request.notes)
    except SessionError as e:
        raise http_error(e) from e


@router.post("/end", response_model=Workout)
async def end_session(manager: WorkoutSessionManager = Depends(get_session_manager)):
    """Complete and persist the active workout."""
    try:
        completed = await manager.end_workout()
    except SessionError as e:
        raise http_error(e) from e
    if completed is None:
        raise HTTPException(status_code=409, detail="No active workout")
    return completed


@router.post("/discard", response_model=Workout)
async def discard_session(manager: WorkoutSessionManager = Depends(get_session_manager)):
    """Drop the active workout without keeping a record."""
    try:
        discarded = await manager.discard_workout()
    except SessionError as e:
        raise http_error(e) from e
    if discarded is None:
        raise HTTPException(status_code=409, detail="No active workout")
    return discarded


@router.post("/sets", response_model=ExerciseSet, status_code=201)
async def add_set(
    request: AddSetRequest,
    manager: WorkoutSessionManager = Depends(get_session_manager),
):
    """Log a set against the active workout."""
    try:
        return await manager.add_set(
            request.exercise_id,
            reps=request.reps,
            weight=request.weight,
            failure_level=request.failure_level,
            unit=request.unit,
        )
    except SessionError as e:
        raise http_error(e) from e


@router.patch("/sets/{set_id}", response_model=ExerciseSet)
async def edit_set(
    set_id: str,
    request: EditSetRequest,
    manager: WorkoutSessionManager = Depends(get_session_manager),
):
    """Edit fields of a set in the active workout."""
    try:
        return await manager.edit_set(
            set_id,
            exercise=request.exercise_id,
            reps=request.reps,
            weight=request.weight,
            unit=request.unit,
            failure_level=request.failure_level,
        )
    except SessionError as e:
        raise http_error(e) from e


@router.delete("/sets/{set_id}", response_model=ExerciseSet)
async def remove_set(
    set_id: str,
    manager: WorkoutSessionManager = Depends(get_session_manager),
):
    """Remove a set from the active workout."""
    try:
        return await manager.remove_set(set_id)
    except SessionError as e:
        raise http_error(e) from e


@router.post("/sets/{set_id}/duplicate", response_model=ExerciseSet, status_code=201)
async def duplicate_set(
    set_id: str,
    manager: WorkoutSessionManager = Depends(get_session_manager),
):
    """Append a copy of a set to the active workout."""
    try:
        return await manager.duplicate_set(set_id)
    except SessionError as e:
        raise http_error(e) from e
