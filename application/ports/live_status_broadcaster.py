"""
Live Status Broadcaster Interface (Port).

Pushes session snapshots to an OS-level live activity surface. Every call is
asynchronous and may fail; the session manager treats the broadcaster as a
best-effort side channel and tolerates its absence entirely.
"""
from typing import Protocol

from domain.models import LiveStatusSnapshot


class LiveStatusBroadcaster(Protocol):
    """Abstract interface for the live activity surface."""

    async def start(self, session_id: str, title: str) -> None:
        """
        Begin a live activity for a session.

        Args:
            session_id: Workout id of the session
            title: Workout name shown on the surface
        """
        ...

    async def update(self, snapshot: LiveStatusSnapshot) -> None:
        """Push an in-progress snapshot."""
        ...

    async def end(self, final_snapshot: LiveStatusSnapshot) -> None:
        """Push the final snapshot and close the live activity."""
        ...
