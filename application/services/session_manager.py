"""
Workout session manager - the active-workout state machine.

States:
    IDLE    no active workout
    ACTIVE  exactly one in-memory Workout with is_active=True, clock running

Transitions back to IDLE go through end_workout (persisted) or
discard_workout (dropped). Every state-changing coroutine runs under one
asyncio.Lock, so UI-driven mutations and clock ticks are serialized through
a single owner. Clock callbacks carry the session token they were started
with; a callback whose token is stale is a no-op.

Live status calls never run under that lock. Transitions queue them and a
sender task delivers them in order, so a slow relay delays only other live
status calls. Queued in-progress updates for the same session coalesce.

Usage:
    >>> manager = WorkoutSessionManager(store=store, catalog=catalog)
    >>> await manager.start_workout(name="Leg Day")
    >>> await manager.add_set("barbell-back-squat", reps=8, weight=100)
    >>> completed = await manager.end_workout()
"""

import asyncio
import logging
import uuid
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Callable, Deque, List, Optional, Tuple, Union

from pydantic import ValidationError

from application.errors import (
    PersistenceError,
    SessionStateError,
    SetNotFoundError,
    WorkoutValidationError,
)
from application.ports import ExerciseCatalog, LiveStatusBroadcaster, WorkoutStore
from application.services.session_clock import SessionClock
from domain.models import (
    Exercise,
    ExerciseSet,
    FailureLevel,
    LiveStatusSnapshot,
    SessionStatus,
    Weight,
    Workout,
)

logger = logging.getLogger(__name__)

DEFAULT_BROADCAST_TIMEOUT_SECONDS = 2.0


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionState(str, Enum):
    IDLE = "idle"
    ACTIVE = "active"


class SessionEventType(str, Enum):
    """Kinds of state-changed notifications."""

    STARTED = "started"
    UPDATED = "updated"
    TICK = "tick"
    ENDED = "ended"
    DISCARDED = "discarded"
    RECOVERED = "recovered"


class RecoveryPolicy(str, Enum):
    """What to do with an active record found in the store on cold start."""

    RESUME = "resume"
    FINALIZE = "finalize"
    DISCARD = "discard"


@dataclass(frozen=True)
class SessionEvent:
    """State-changed notification. `workout` is always a snapshot."""

    type: SessionEventType
    workout: Optional[Workout] = None


@dataclass
class RecoveryResult:
    """Outcome of a cold-start recovery attempt."""

    policy: RecoveryPolicy
    workout: Optional[Workout] = None
    resumed: bool = False
    finalized_ids: List[str] = field(default_factory=list)


SessionListener = Callable[[SessionEvent], None]
ExerciseRef = Union[Exercise, str]
WeightInput = Union[Weight, float, int]


def _validation_error(message: str, exc: ValidationError) -> WorkoutValidationError:
    errors = [
        f"{'.'.join(str(part) for part in err['loc']) or 'value'}: {err['msg']}"
        for err in exc.errors()
    ]
    return WorkoutValidationError(message, errors)


class WorkoutSessionManager:
    """
    Owns the single active workout session.

    Dependencies are injected via constructor; one instance is created per
    process. The store is required. The catalog is only needed when sets are
    added by exercise id, and the broadcaster may be None on platforms
    without a live activity surface.
    """

    def __init__(
        self,
        store: WorkoutStore,
        *,
        catalog: Optional[ExerciseCatalog] = None,
        broadcaster: Optional[LiveStatusBroadcaster] = None,
        clock: Optional[SessionClock] = None,
        now: Callable[[], datetime] = utcnow,
        replace_active_on_start: bool = True,
        broadcast_timeout: float = DEFAULT_BROADCAST_TIMEOUT_SECONDS,
    ) -> None:
        self._store = store
        self._catalog = catalog
        self._broadcaster = broadcaster
        self._clock = clock or SessionClock()
        self._now = now
        self._replace_active_on_start = replace_active_on_start
        self._broadcast_timeout = broadcast_timeout

        self._lock = asyncio.Lock()
        self._workout: Optional[Workout] = None
        self._started_at: Optional[datetime] = None
        self._token: Optional[str] = None
        self._listeners: List[SessionListener] = []

        # Live status outbox: (action, workout id, payload), drained by _sender.
        self._live_session: Optional[str] = None
        self._outbox: Deque[Tuple[str, str, Any]] = deque()
        self._outbox_idle = asyncio.Event()
        self._outbox_idle.set()
        self._sender: Optional[asyncio.Task] = None

    # -------------------------------------------------------------------------
    # Read-only state
    # -------------------------------------------------------------------------

    @property
    def store(self) -> WorkoutStore:
        return self._store

    @property
    def catalog(self) -> Optional[ExerciseCatalog]:
        return self._catalog

    @property
    def state(self) -> SessionState:
        return SessionState.ACTIVE if self._workout is not None else SessionState.IDLE

    @property
    def is_active(self) -> bool:
        return self._workout is not None

    @property
    def session_token(self) -> Optional[str]:
        """Identity of the current session as seen by clock callbacks."""
        return self._token

    @property
    def started_at(self) -> Optional[datetime]:
        return self._started_at

    @property
    def has_live_activity(self) -> bool:
        """True once the live surface has accepted the current session."""
        return self._live_session is not None

    def active_snapshot(self) -> Optional[Workout]:
        """Copy of the active workout, or None when idle."""
        if self._workout is None:
            return None
        return self._workout.snapshot()

    # -------------------------------------------------------------------------
    # Subscriptions
    # -------------------------------------------------------------------------

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """
        Register a state-changed listener.

        Args:
            listener: Called synchronously with each SessionEvent

        Returns:
            Function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event_type: SessionEventType, workout: Optional[Workout] = None) -> None:
        if not self._listeners:
            return
        source = workout if workout is not None else self._workout
        event = SessionEvent(
            type=event_type,
            workout=source.snapshot() if source is not None else None,
        )
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("Session listener failed on %s event", event_type.value)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def start_workout(
        self,
        name: Optional[str] = None,
        notes: str = "",
    ) -> Workout:
        """
        Start a new active workout.

        If a workout is already active it is ended first (or, when
        replace_active_on_start is disabled, SessionStateError is raised).
        The new workout is written to the store before the session becomes
        active, so a failed write leaves the manager idle.

        Returns:
            Snapshot of the new active workout

        Raises:
            SessionStateError: A workout is active and replacement is disabled
            WorkoutValidationError: Name or notes are invalid
            PersistenceError: The store rejected the write
        """
        async with self._lock:
            if self._workout is not None:
                if not self._replace_active_on_start:
                    raise SessionStateError(
                        f"Workout '{self._workout.name}' is already active"
                    )
                logger.info(
                    "Ending active workout %s before starting a new one",
                    self._workout.id,
                )
                await self._end_locked()

            now = self._now()
            try:
                workout = Workout.begin(now, name=name, notes=notes)
            except ValidationError as e:
                raise _validation_error("Invalid workout details", e) from e

            await self._write(workout)

            self._workout = workout
            self._started_at = now
            self._start_clock()
            self._open_live_activity(workout)

            logger.info("Workout started: %s (%s)", workout.name, workout.id)
            self._emit(SessionEventType.STARTED)
            return workout.snapshot()

    async def end_workout(self) -> Optional[Workout]:
        """
        Complete the active workout and persist it.

        Awaits the store write so the caller knows the record is durable
        before the manager reports IDLE. Calling this while idle logs and
        returns None.

        Returns:
            Snapshot of the completed workout, or None when idle

        Raises:
            PersistenceError: The store rejected the write; the session stays active
        """
        async with self._lock:
            if self._workout is None:
                logger.warning("end_workout called with no active workout")
                return None
            return await self._end_locked()

    async def discard_workout(self) -> Optional[Workout]:
        """
        Drop the active workout without keeping a record.

        Returns:
            Snapshot of the discarded workout, or None when idle

        Raises:
            PersistenceError: The store could not delete the trace; the session stays active
        """
        async with self._lock:
            workout = self._workout
            if workout is None:
                logger.warning("discard_workout called with no active workout")
                return None

            self._refresh_duration(self._now())
            self._stop_clock()
            try:
                await self._store_call(self._delete_trace, workout.snapshot())
            except PersistenceError:
                self._start_clock()
                raise

            discarded = workout.model_copy(deep=True, update={"is_active": False})
            self._clear_session()
            self._close_live_activity(
                discarded.id,
                LiveStatusSnapshot.of(
                    discarded, discarded.duration_seconds, SessionStatus.DISCARDED
                )
            )

            logger.info("Workout discarded: %s (%s)", discarded.name, discarded.id)
            self._emit(SessionEventType.DISCARDED, discarded)
            return discarded

    async def shutdown(self) -> None:
        """
        Release the session on clean process exit.

        The active record is written with its latest duration and stays
        is_active=True in the store so the next process can recover it.
        Store failures are logged, not raised. Queued live status calls are
        delivered first; the live activity itself is left open.
        """
        async with self._lock:
            workout = self._workout
            if workout is not None:
                self._refresh_duration(self._now())
                self._stop_clock()
                try:
                    await self._write(workout)
                except PersistenceError as e:
                    logger.error("Failed to persist active workout on shutdown: %s", e)
                self._clear_session()
                logger.info(
                    "Session manager shut down with workout %s still active", workout.id
                )
        await self.drain_live_status()
        self._live_session = None

    async def drain_live_status(self) -> None:
        """Wait until every queued live status call was delivered or given up on."""
        await self._outbox_idle.wait()

    async def delete_record(self, workout_id: str) -> Optional[Workout]:
        """
        Delete a completed workout from the store.

        Runs under the session lock so it cannot interleave with a
        write-through of the active workout.

        Returns:
            The deleted record, or None if no record has that id

        Raises:
            SessionStateError: The record is active; it must be discarded instead
            PersistenceError: The store could not be read or written
        """
        async with self._lock:
            record = await self._store_call(self._store.fetch, workout_id)
            if record is None:
                return None
            if record.is_active or (self._workout is not None and self._workout.id == workout_id):
                raise SessionStateError(
                    f"Workout {workout_id} is active; discard the session instead"
                )
            await self._store_call(self._delete_trace, record)
            logger.info("Workout record deleted: %s", workout_id)
            return record

    async def recover(self, policy: RecoveryPolicy = RecoveryPolicy.RESUME) -> RecoveryResult:
        """
        Apply the recovery policy to an active record left in the store.

        When more than one active record exists, every record except the
        newest is finalized so at most one stays active.

        Args:
            policy: RESUME, FINALIZE or DISCARD

        Returns:
            RecoveryResult describing what happened

        Raises:
            SessionStateError: A session is already active in this process
            PersistenceError: The store could not be read or written
        """
        async with self._lock:
            if self._workout is not None:
                raise SessionStateError("Cannot recover while a workout is active")

            records = await self._store_call(self._store.fetch_all, True)
            active = [w for w in records if w.is_active]
            result = RecoveryResult(policy=policy)
            if not active:
                logger.info("No active workout to recover")
                return result

            newest, stale = active[0], active[1:]
            for record in stale:
                logger.warning("Finalizing stale active workout %s", record.id)
                await self._write(record.completed(record.duration_seconds))
                result.finalized_ids.append(record.id)

            if policy == RecoveryPolicy.DISCARD:
                await self._store_call(self._delete_trace, newest)
                logger.info("Discarded recovered workout %s", newest.id)
                result.workout = newest.model_copy(update={"is_active": False})
                return result

            if policy == RecoveryPolicy.FINALIZE:
                finalized = newest.completed(newest.duration_seconds)
                await self._write(finalized)
                logger.info("Finalized recovered workout %s", newest.id)
                result.finalized_ids.append(newest.id)
                result.workout = finalized
                return result

            started_at = newest.started_at_utc
            elapsed = (self._now() - started_at).total_seconds()
            if elapsed > newest.duration_seconds:
                newest.duration_seconds = elapsed
            await self._write(newest)

            self._workout = newest
            self._started_at = started_at
            self._start_clock()
            self._open_live_activity(newest)

            logger.info("Resumed workout %s (%s)", newest.name, newest.id)
            self._emit(SessionEventType.RECOVERED)
            result.workout = newest.snapshot()
            result.resumed = True
            return result

    # -------------------------------------------------------------------------
    # Set mutations (write-through)
    # -------------------------------------------------------------------------

    async def add_set(
        self,
        exercise: ExerciseRef,
        reps: int,
        weight: WeightInput,
        failure_level: Union[FailureLevel, str] = FailureLevel.NONE,
        *,
        unit: str = "kg",
    ) -> ExerciseSet:
        """
        Log a set against the active workout.

        Args:
            exercise: Exercise, catalog exercise id or exercise name
            reps: Non-negative repetitions
            weight: Weight value (in `unit`) or Weight
            failure_level: FailureLevel or its string value
            unit: "kg" or "lb" when weight is a number

        Returns:
            Copy of the new set

        Raises:
            SessionStateError: No workout is active
            WorkoutValidationError: Input rejected; nothing was mutated
            PersistenceError: The set was kept in memory but not written
        """
        async with self._lock:
            workout = self._require_active("add a set")
            resolved = self._resolve_exercise(exercise)
            level = self._coerce_failure_level(failure_level)
            weight_kg = self._to_kg(weight, unit)

            now = self._now()
            try:
                new_set = ExerciseSet(
                    exercise=resolved,
                    reps=reps,
                    weight_kg=weight_kg,
                    timestamp=now,
                    elapsed_seconds=self._elapsed(now),
                    failure_level=level,
                )
            except ValidationError as e:
                raise _validation_error("Invalid set", e) from e

            workout.exercise_sets.append(new_set)
            self._refresh_duration(now)
            logger.info(
                "Set added to %s: %s (%d total)", workout.id, new_set, workout.set_count
            )
            await self._write_mutation(workout)
            return new_set.model_copy(deep=True)

    async def edit_set(
        self,
        set_id: str,
        *,
        exercise: Optional[ExerciseRef] = None,
        reps: Optional[int] = None,
        weight: Optional[WeightInput] = None,
        unit: str = "kg",
        failure_level: Optional[Union[FailureLevel, str]] = None,
    ) -> ExerciseSet:
        """
        Replace fields of an existing set. Id, timestamp and elapsed time are kept.

        Raises:
            SessionStateError: No workout is active
            SetNotFoundError: No set with that id
            WorkoutValidationError: Input rejected; nothing was mutated
            PersistenceError: The edit was kept in memory but not written
        """
        async with self._lock:
            workout = self._require_active("edit a set")
            index = self._index_of(workout, set_id)
            current = workout.exercise_sets[index]

            resolved = self._resolve_exercise(exercise) if exercise is not None else None
            level = (
                self._coerce_failure_level(failure_level)
                if failure_level is not None
                else None
            )
            weight_kg = self._to_kg(weight, unit) if weight is not None else None
            try:
                updated = current.with_changes(
                    exercise=resolved,
                    reps=reps,
                    weight_kg=weight_kg,
                    failure_level=level,
                )
            except ValidationError as e:
                raise _validation_error("Invalid set", e) from e

            workout.exercise_sets[index] = updated
            logger.info("Set %s edited in %s", set_id, workout.id)
            await self._write_mutation(workout)
            return updated.model_copy(deep=True)

    async def remove_set(self, set_id: str) -> ExerciseSet:
        """
        Remove a set from the active workout.

        Returns:
            Copy of the removed set
        """
        async with self._lock:
            workout = self._require_active("remove a set")
            index = self._index_of(workout, set_id)
            removed = workout.exercise_sets.pop(index)
            logger.info("Set %s removed from %s", set_id, workout.id)
            await self._write_mutation(workout)
            return removed

    async def duplicate_set(self, set_id: str) -> ExerciseSet:
        """
        Append a copy of an existing set with a new id and capture time.

        Returns:
            Copy of the new set
        """
        async with self._lock:
            workout = self._require_active("duplicate a set")
            source = workout.exercise_sets[self._index_of(workout, set_id)]

            now = self._now()
            if now <= source.timestamp:
                # Timestamps order sets; never hand out one equal to the source.
                now = source.timestamp + timedelta(microseconds=1)
            copy = source.duplicate(timestamp=now, elapsed_seconds=self._elapsed(now))

            workout.exercise_sets.append(copy)
            self._refresh_duration(now)
            logger.info("Set %s duplicated as %s in %s", set_id, copy.id, workout.id)
            await self._write_mutation(workout)
            return copy.model_copy(deep=True)

    async def update_details(
        self,
        name: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Workout:
        """
        Rename the active workout and/or replace its notes.

        Both values are validated before either is applied, and the change
        is written once.

        Raises:
            SessionStateError: No workout is active
            WorkoutValidationError: A value is invalid or none was given; nothing was mutated
            PersistenceError: The change was kept in memory but not written
        """
        async with self._lock:
            workout = self._require_active("update the workout")
            changes = {}
            if name is not None:
                changes["name"] = name
            if notes is not None:
                changes["notes"] = notes
            if not changes:
                raise WorkoutValidationError("Provide a name and/or notes")

            candidate = workout.model_copy(deep=True)
            try:
                for field_name, value in changes.items():
                    setattr(candidate, field_name, value)
            except ValidationError as e:
                raise _validation_error("Invalid workout details", e) from e

            workout.name = candidate.name
            workout.notes = candidate.notes
            logger.info("Workout %s details updated: %s", workout.id, ", ".join(changes))
            await self._write_mutation(workout)
            return workout.snapshot()

    async def rename_workout(self, name: str) -> Workout:
        """Rename the active workout."""
        return await self.update_details(name=name)

    async def update_notes(self, notes: str) -> Workout:
        """Replace the notes of the active workout."""
        return await self.update_details(notes=notes)

    # -------------------------------------------------------------------------
    # Clock callbacks
    # -------------------------------------------------------------------------

    async def tick(self, token: Optional[str] = None) -> None:
        """
        Fast tick: recompute duration from the session start time.

        Idempotent and monotonic. A stale token, or no active session, makes
        this a no-op. Passing no token targets the current session.
        """
        async with self._lock:
            if not self._is_current(token):
                logger.debug("Ignoring tick for stale session token %s", token)
                return
            self._refresh_duration(self._now())
            self._emit(SessionEventType.TICK)

    async def broadcast_tick(self, token: Optional[str] = None) -> None:
        """Slow tick: queue an in-progress snapshot for the live activity."""
        async with self._lock:
            if not self._is_current(token):
                logger.debug("Ignoring broadcast tick for stale session token %s", token)
                return
            workout = self._workout
            self._refresh_duration(self._now())
            snapshot = LiveStatusSnapshot.of(
                workout, workout.duration_seconds, SessionStatus.IN_PROGRESS
            )
            self._queue_live_status("update", workout.id, snapshot)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    async def _end_locked(self) -> Workout:
        workout = self._workout
        self._refresh_duration(self._now())
        completed = workout.completed(workout.duration_seconds)

        # Tear down before the transition so no tick can observe it.
        self._stop_clock()
        try:
            await self._write(completed)
        except PersistenceError:
            self._start_clock()
            raise

        workout.is_active = False
        self._clear_session()
        self._close_live_activity(
            completed.id,
            LiveStatusSnapshot.of(
                completed, completed.duration_seconds, SessionStatus.COMPLETED
            )
        )

        logger.info(
            "Workout ended: %s (%s), %.0fs, %d sets",
            completed.name,
            completed.id,
            completed.duration_seconds,
            completed.set_count,
        )
        self._emit(SessionEventType.ENDED, completed)
        return completed.snapshot()

    def _require_active(self, action: str) -> Workout:
        if self._workout is None:
            raise SessionStateError(f"Cannot {action}: no active workout")
        return self._workout

    def _is_current(self, token: Optional[str]) -> bool:
        if self._workout is None:
            return False
        return token is None or token == self._token

    def _clear_session(self) -> None:
        self._workout = None
        self._started_at = None
        self._token = None

    def _start_clock(self) -> None:
        self._token = uuid.uuid4().hex
        self._clock.start(self._token, self.tick, self.broadcast_tick)

    def _stop_clock(self) -> None:
        self._clock.stop()
        self._token = None

    def _elapsed(self, now: datetime) -> float:
        if self._started_at is None:
            return 0.0
        return max(0.0, (now - self._started_at).total_seconds())

    def _refresh_duration(self, now: datetime) -> None:
        elapsed = self._elapsed(now)
        if elapsed > self._workout.duration_seconds:
            self._workout.duration_seconds = elapsed

    def _index_of(self, workout: Workout, set_id: str) -> int:
        try:
            return workout.index_of_set(set_id)
        except KeyError:
            raise SetNotFoundError(set_id) from None

    def _resolve_exercise(self, exercise: ExerciseRef) -> Exercise:
        if isinstance(exercise, Exercise):
            return exercise
        if self._catalog is None:
            raise WorkoutValidationError(
                f"Cannot resolve exercise '{exercise}': no exercise catalog configured"
            )
        found = self._catalog.get_by_id(exercise) or self._catalog.find_by_name(exercise)
        if found is None:
            raise WorkoutValidationError(
                f"Unknown exercise '{exercise}'", [f"exercise: '{exercise}' not in catalog"]
            )
        return found

    @staticmethod
    def _coerce_failure_level(level: Union[FailureLevel, str]) -> FailureLevel:
        if isinstance(level, FailureLevel):
            return level
        try:
            return FailureLevel(level)
        except ValueError:
            allowed = ", ".join(f.value for f in FailureLevel)
            raise WorkoutValidationError(
                f"Invalid failure level '{level}'",
                [f"failure_level: must be one of {allowed}"],
            ) from None

    @staticmethod
    def _to_kg(weight: WeightInput, unit: str) -> float:
        if isinstance(weight, Weight):
            return weight.to_kg()
        if isinstance(weight, bool):
            raise WorkoutValidationError("Invalid weight", ["weight: must be a number"])
        try:
            return Weight(value=weight, unit=unit).to_kg()
        except ValidationError as e:
            raise _validation_error("Invalid weight", e) from e

    # -- persistence ----------------------------------------------------------

    async def _store_call(self, fn: Callable[..., Any], *args: Any) -> Any:
        """Run a blocking store call off the event loop, normalising errors."""
        try:
            return await asyncio.to_thread(fn, *args)
        except PersistenceError:
            raise
        except Exception as e:
            logger.error("Workout store call %s failed: %s", getattr(fn, "__name__", fn), e)
            raise PersistenceError(f"Workout store failure: {e}") from e

    def _insert_and_commit(self, workout: Workout) -> None:
        self._store.insert(workout)
        self._store.save()

    def _delete_trace(self, workout: Workout) -> None:
        self._store.delete(workout)
        self._store.save()

    async def _write(self, workout: Workout) -> None:
        await self._store_call(self._insert_and_commit, workout.snapshot())

    async def _write_mutation(self, workout: Workout) -> None:
        """Write-through after a mutation; the mutation stands even if the write fails."""
        try:
            await self._write(workout)
        finally:
            self._emit(SessionEventType.UPDATED)

    # -- live activity --------------------------------------------------------

    def _open_live_activity(self, workout: Workout) -> None:
        opening = LiveStatusSnapshot.of(
            workout, workout.duration_seconds, SessionStatus.STARTED
        )
        self._queue_live_status("start", workout.id, (workout.name, opening))

    def _close_live_activity(self, workout_id: str, final: LiveStatusSnapshot) -> None:
        self._queue_live_status("end", workout_id, final)

    def _queue_live_status(self, action: str, workout_id: str, payload: Any) -> None:
        if self._broadcaster is None:
            return
        if action == "update" and self._outbox and self._outbox[-1][:2] == (action, workout_id):
            self._outbox[-1] = (action, workout_id, payload)
        else:
            self._outbox.append((action, workout_id, payload))
        self._outbox_idle.clear()
        if self._sender is None or self._sender.done():
            self._sender = asyncio.create_task(self._send_live_status())

    async def _send_live_status(self) -> None:
        while self._outbox:
            action, workout_id, payload = self._outbox.popleft()
            try:
                await self._deliver_live_status(action, workout_id, payload)
            except Exception:
                logger.exception("Live status %s for %s failed", action, workout_id)
        self._outbox_idle.set()

    async def _deliver_live_status(self, action: str, workout_id: str, payload: Any) -> None:
        if action == "start":
            title, opening = payload
            started = await self._call_broadcaster(
                "start", self._broadcaster.start(workout_id, title)
            )
            if started:
                self._live_session = workout_id
                await self._call_broadcaster("update", self._broadcaster.update(opening))
            return

        # Updates and ends only reach the activity that was actually started.
        if workout_id != self._live_session:
            logger.debug("Dropping live status %s for inactive session %s", action, workout_id)
            return
        if action == "end":
            self._live_session = None
            await self._call_broadcaster("end", self._broadcaster.end(payload))
        else:
            await self._call_broadcaster("update", self._broadcaster.update(payload))

    async def _call_broadcaster(self, action: str, call) -> bool:
        try:
            await asyncio.wait_for(call, timeout=self._broadcast_timeout)
            return True
        except asyncio.TimeoutError:
            logger.warning(
                "Live status %s timed out after %ss", action, self._broadcast_timeout
            )
        except Exception as e:
            logger.warning("Live status %s failed: %s", action, e)
        return False
