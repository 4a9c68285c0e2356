"""
Application services.

The session manager is the single owner of the active workout; the session
clock drives its fast and slow ticks.
"""

from application.services.session_clock import (
    DEFAULT_FAST_TICK_SECONDS,
    DEFAULT_SLOW_TICK_SECONDS,
    SessionClock,
)
from application.services.session_manager import (
    RecoveryPolicy,
    RecoveryResult,
    SessionEvent,
    SessionEventType,
    SessionState,
    WorkoutSessionManager,
)

__all__ = [
    "DEFAULT_FAST_TICK_SECONDS",
    "DEFAULT_SLOW_TICK_SECONDS",
    "SessionClock",
    "RecoveryPolicy",
    "RecoveryResult",
    "SessionEvent",
    "SessionEventType",
    "SessionState",
    "WorkoutSessionManager",
]
