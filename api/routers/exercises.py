"""
Exercises router for catalog lookup.

This router provides endpoints for:
- Listing catalog exercises, optionally filtered by group
- Listing the distinct groups
- Looking up an exercise by ID
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Path

from api.deps import get_exercise_catalog
from application.ports import ExerciseCatalog
from domain.models import Exercise

router = APIRouter(
    prefix="/exercises",
    tags=["Exercises"],
)


@router.get("", response_model=List[Exercise])
def list_exercises(
    group: Optional[str] = Query(None, description="Filter by group (case-insensitive)"),
    catalog: ExerciseCatalog = Depends(get_exercise_catalog),
):
    """List catalog exercises in catalog order."""
    exercises = catalog.get_all()
    if group:
        wanted = group.casefold()
        exercises = [e for e in exercises if e.group.casefold() == wanted]
    return exercises


@router.get("/groups", response_model=List[str])
def list_groups(catalog: ExerciseCatalog = Depends(get_exercise_catalog)):
    """List distinct exercise groups in first-seen order."""
    return catalog.groups()


@router.get("/{exercise_id}", response_model=Exercise)
def get_exercise(
    exercise_id: str = Path(..., description="Catalog exercise id"),
    catalog: ExerciseCatalog = Depends(get_exercise_catalog),
):
    """Get a catalog exercise by ID."""
    exercise = catalog.get_by_id(exercise_id)
    if exercise is None:
        raise HTTPException(status_code=404, detail=f"Exercise '{exercise_id}' not found")
    return exercise
