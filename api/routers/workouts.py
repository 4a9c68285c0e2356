"""
Workouts router for browsing persisted workouts.

This router contains endpoints for:
- /workouts - List workouts, newest first
- /workouts/active - The active record as persisted in the store
- /workouts/{workout_id} - Get, delete a completed workout

Writes to the active workout go through /session; this router never
modifies an active record.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from api.deps import get_session_manager, get_workout_store
from api.errors import http_error
from application.errors import SessionError
from application.ports import WorkoutStore
from application.services import WorkoutSessionManager
from domain.models import Workout

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/workouts",
    tags=["Workouts"],
)


@router.get("", response_model=List[Workout])
def list_workouts(
    include_active: bool = Query(False, description="Include the active record"),
    oldest_first: bool = Query(False, description="Sort oldest first"),
    limit: int = Query(50, ge=1, le=500),
    store: WorkoutStore = Depends(get_workout_store),
):
    """List persisted workouts, newest first by default."""
    try:
        workouts = store.fetch_all(sort_by_date_desc=not oldest_first)
    except SessionError as e:
        raise http_error(e) from e
    if not include_active:
        workouts = [w for w in workouts if not w.is_active]
    return workouts[:limit]


@router.get("/active", response_model=Workout)
def get_active_workout(store: WorkoutStore = Depends(get_workout_store)):
    """Get the active workout record as last written to the store."""
    try:
        workout = store.fetch_active()
    except SessionError as e:
        raise http_error(e) from e
    if workout is None:
        raise HTTPException(status_code=404, detail="No active workout")
    return workout


@router.get("/{workout_id}", response_model=Workout)
def get_workout(
    workout_id: str,
    store: WorkoutStore = Depends(get_workout_store),
):
    """Get a single workout by ID."""
    try:
        workout = store.fetch(workout_id)
    except SessionError as e:
        raise http_error(e) from e
    if workout is None:
        raise HTTPException(status_code=404, detail=f"Workout '{workout_id}' not found")
    return workout


@router.delete("/{workout_id}")
async def delete_workout(
    workout_id: str,
    manager: WorkoutSessionManager = Depends(get_session_manager),
):
    """Delete a completed workout. The active workout must be discarded via /session."""
    try:
        deleted = await manager.delete_record(workout_id)
    except SessionError as e:
        raise http_error(e) from e
    if deleted is None:
        raise HTTPException(status_code=404, detail=f"Workout '{workout_id}' not found")

    logger.info(f"Workout deleted: {workout_id}")
    return {"success": True, "workout_id": workout_id}
