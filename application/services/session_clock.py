"""
Session clock: two independent periodic signals for the active session.

The fast signal refreshes the stored duration; the slow signal drives the
live status broadcaster. Neither keeps a counter. Each tick only hands the
session token it was started with back to its callback, and the session
manager computes elapsed time from the session start time.
"""

import asyncio
import logging
from typing import Awaitable, Callable, List, Optional

logger = logging.getLogger(__name__)

TickCallback = Callable[[str], Awaitable[None]]

DEFAULT_FAST_TICK_SECONDS = 1.0
DEFAULT_SLOW_TICK_SECONDS = 5.0


class SessionClock:
    """
    Runs the fast and slow tick loops as asyncio tasks.

    start() must be called from a running event loop. stop() cancels both
    loops synchronously and is safe to call repeatedly. A tick that was
    already in flight when stop() ran carries a token the session manager
    no longer recognises, so it is ignored there.

    Usage:
        >>> clock = SessionClock(fast_interval=1.0, slow_interval=5.0)
        >>> clock.start("token-1", manager.tick, manager.broadcast_tick)
        >>> clock.stop()
    """

    def __init__(
        self,
        fast_interval: float = DEFAULT_FAST_TICK_SECONDS,
        slow_interval: float = DEFAULT_SLOW_TICK_SECONDS,
    ) -> None:
        if fast_interval <= 0 or slow_interval <= 0:
            raise ValueError("Tick intervals must be positive")
        self.fast_interval = fast_interval
        self.slow_interval = slow_interval
        self._token: Optional[str] = None
        self._tasks: List[asyncio.Task] = []

    @property
    def running(self) -> bool:
        return any(not task.done() for task in self._tasks)

    @property
    def token(self) -> Optional[str]:
        """Token of the session the clock is currently ticking for."""
        return self._token

    def start(
        self,
        token: str,
        on_fast_tick: TickCallback,
        on_slow_tick: TickCallback,
    ) -> None:
        """
        Start both tick loops for the session identified by `token`.

        Any previous loops are stopped first.
        """
        self.stop()
        loop = asyncio.get_running_loop()
        self._token = token
        self._tasks = [
            loop.create_task(
                self._run("fast", self.fast_interval, token, on_fast_tick),
                name=f"session-clock-fast-{token}",
            ),
            loop.create_task(
                self._run("slow", self.slow_interval, token, on_slow_tick),
                name=f"session-clock-slow-{token}",
            ),
        ]
        logger.debug(
            "Session clock started (fast=%ss, slow=%ss)",
            self.fast_interval,
            self.slow_interval,
        )

    def stop(self) -> None:
        """Cancel both loops and forget the token."""
        if self._tasks:
            logger.debug("Session clock stopped")
        for task in self._tasks:
            task.cancel()
        self._tasks = []
        self._token = None

    async def _run(
        self,
        name: str,
        interval: float,
        token: str,
        callback: TickCallback,
    ) -> None:
        while True:
            await asyncio.sleep(interval)
            if self._token != token:
                return
            try:
                await callback(token)
            except asyncio.CancelledError:
                raise
            except Exception:
                # Errors are logged; the loop keeps running.
                logger.exception("Session clock %s tick failed", name)
