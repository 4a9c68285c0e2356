"""
Live status snapshot pushed to the OS-level live activity surface.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class SessionStatus(str, Enum):
    """Status label shown on the live activity."""

    STARTED = "started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    DISCARDED = "discarded"


class LiveStatusSnapshot(BaseModel):
    """Immutable point-in-time view of the active session."""

    duration_seconds: float = Field(..., ge=0)
    current_exercise_name: Optional[str] = None
    set_count: int = Field(default=0, ge=0)
    status: SessionStatus

    model_config = {"frozen": True}

    @classmethod
    def of(cls, workout, duration_seconds: float, status: SessionStatus) -> "LiveStatusSnapshot":
        """Build a snapshot from a workout; completed snapshots carry no exercise name."""
        name = workout.last_exercise_name
        if status in (SessionStatus.COMPLETED, SessionStatus.DISCARDED):
            name = None
        return cls(
            duration_seconds=max(0.0, duration_seconds),
            current_exercise_name=name,
            set_count=workout.set_count,
            status=status,
        )
