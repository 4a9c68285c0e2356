"""
Error taxonomy for the workout session core.

Every error raised by the session manager or a store adapter derives from
SessionError. None of them are fatal: after any single failure the manager
is left in a consistent, resumable state.
"""

from typing import List, Optional


class SessionError(Exception):
    """Base class for session core errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class WorkoutValidationError(SessionError):
    """Raised when set or workout input is malformed. Nothing was mutated."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = errors or []


class SetNotFoundError(WorkoutValidationError):
    """Raised when a set id does not exist in the active workout."""

    def __init__(self, set_id: str):
        super().__init__(f"Set {set_id} not found in active workout")
        self.set_id = set_id


class SessionStateError(SessionError):
    """Raised when an operation is invoked in the wrong session state."""


class PersistenceError(SessionError):
    """
    Raised when a store write or read fails.

    The in-memory session stays authoritative; the next mutation rewrites
    the whole snapshot.
    """


class BroadcastError(SessionError):
    """Raised by broadcaster adapters. Always caught by the session manager."""
