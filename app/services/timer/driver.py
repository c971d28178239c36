"""
Timer Driver - bridges wall-clock time to the engine and to the store

Local state is authoritative. Ticks and user actions mutate it synchronously
on the event loop, so they cannot interleave. Replication to the store is
awaited afterwards and never holds up ticking; pushes run one at a time and
each sends the newest local state, so a slow push cannot overwrite a later one.
"""
import asyncio
import logging
import math
import time
from enum import Enum
from typing import Callable, List, Optional

from app.config import SYNC_INTERVAL_SECONDS, TICK_INTERVAL_SECONDS
from app.features.timer.domain import TimerState
from .engine import advance, new_session, switch_mode, toggle_running
from .models.timer_event import TimerEvent
from .notifier import NotificationPermission, Notifier
from .scheduler import PeriodicTask
from .store_client import TimerNotFoundError, TimerStoreClient, TimerStoreError
from .view import TimerView, build_timer_view

logger = logging.getLogger(__name__)


class DriverStatus(str, Enum):
    NO_SESSION = "no_session"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETE = "complete"


class TimerDriver:
    """
    Client-side owner of the timer session.

    Args:
        store: Client for the remote session store
        notifier: Host notifications; None disables them
        clock: Monotonic clock in seconds
        tick_interval: Period of the local tick loop
        sync_interval: Period of the coarse push to the store
        on_error: Receives user-facing messages for failed store calls
        on_change: Receives the new local state after every change
    """

    def __init__(
        self,
        store: TimerStoreClient,
        notifier: Optional[Notifier] = None,
        clock: Callable[[], float] = time.monotonic,
        tick_interval: float = TICK_INTERVAL_SECONDS,
        sync_interval: float = SYNC_INTERVAL_SECONDS,
        on_error: Optional[Callable[[str], None]] = None,
        on_change: Optional[Callable[[Optional[TimerState]], None]] = None,
    ):
        self._store = store
        self._notifier = notifier
        self._clock = clock
        self._on_error = on_error
        self._on_change = on_change

        self._state: Optional[TimerState] = None
        self._last_tick: Optional[float] = None
        self._permission_requested = False
        self._remote_created = False
        self._push_lock = asyncio.Lock()
        self.last_error: Optional[str] = None

        self._tick_task = PeriodicTask(tick_interval, self.tick, name="timer-tick")
        self._sync_task = PeriodicTask(sync_interval, self.sync, name="timer-sync")

    async def __aenter__(self) -> "TimerDriver":
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> Optional[TimerState]:
        return self._state

    @property
    def status(self) -> DriverStatus:
        state = self._state
        if state is None:
            return DriverStatus.NO_SESSION
        if state.is_running:
            return DriverStatus.RUNNING
        if state.is_complete:
            return DriverStatus.COMPLETE
        return DriverStatus.PAUSED

    @property
    def view(self) -> TimerView:
        return build_timer_view(self._state)

    @property
    def ticking(self) -> bool:
        return self._tick_task.running

    @property
    def syncing(self) -> bool:
        return self._sync_task.running

    def _set_state(self, state: Optional[TimerState]) -> Optional[TimerState]:
        self._state = state
        self._reschedule()
        if self._on_change:
            self._on_change(state)
        return state

    def _reschedule(self) -> None:
        """Run the tick loop only while a session is running, the sync loop while one exists"""
        state = self._state
        if state is not None and state.is_running:
            if not self._tick_task.running:
                self._last_tick = self._clock()
                self._tick_task.start()
        else:
            self._tick_task.stop()
            self._last_tick = None

        if state is not None:
            self._sync_task.start()
        else:
            self._sync_task.stop()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def initialize(self) -> Optional[TimerState]:
        """
        Adopt the store's active session, if any.

        Returns:
            The adopted state, or None when the user has to set up a new session
        """
        try:
            session = await self._store.get_active()
        except TimerStoreError as e:
            self._report(f"Failed to load the timer: {e}")
            return None

        if session is None:
            logger.info("No active timer session on the store")
            return None

        logger.info(f"Adopted timer session {session.id} ({session.current_mode.value})")
        self._remote_created = True
        return self._set_state(session.to_state())

    async def aclose(self) -> None:
        self._tick_task.stop()
        self._sync_task.stop()
        await self._store.aclose()

    # ------------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------------

    async def start(self, total_hours: float) -> TimerState:
        """
        Start a new session, replacing any current one.

        If the store rejects or misses the create, the next push creates the
        session instead of updating whatever the store still holds.

        Raises:
            ValueError: If total_hours is outside 0.5..24
        """
        state = new_session(total_hours)
        self._request_permission_once()
        self._remote_created = False
        self._set_state(state)
        self._last_tick = self._clock()
        logger.info(f"Timer started: {state.total_seconds}s split into two {state.half_budget}s budgets")

        async with self._push_lock:
            if self._state is not None:
                await self._create(self._state, "Failed to start the timer")
        return state

    async def pause_resume(self) -> Optional[TimerState]:
        """Toggle running and push immediately; no-op without a session"""
        if self._state is None:
            return None
        state = self._set_state(toggle_running(self._state))
        await self._push()
        return state

    async def switch(self) -> Optional[TimerState]:
        """Flip mode, force running and push immediately; no-op without a session"""
        if self._state is None:
            return None
        state = self._set_state(switch_mode(self._state))
        logger.info(f"Switched to {state.current_mode.value}")
        await self._push()
        return state

    async def reset(self) -> None:
        """Drop the local session and delete it from the store"""
        self._set_state(None)
        self._remote_created = False
        async with self._push_lock:
            try:
                await self._store.delete()
            except TimerStoreError as e:
                self._report(f"Failed to reset the timer: {e}")

    # ------------------------------------------------------------------
    # Periodic callbacks
    # ------------------------------------------------------------------

    def tick(self) -> List[TimerEvent]:
        """
        Advance local state by whole seconds elapsed since the last tick.

        Returns:
            Events produced by this tick
        """
        state = self._state
        if state is None or not state.is_running:
            return []

        now = self._clock()
        if self._last_tick is None:
            self._last_tick = now
            return []

        elapsed = math.floor(now - self._last_tick)
        if elapsed < 1:
            return []

        self._last_tick = now
        result = advance(state, elapsed)
        self._set_state(result.state)
        for event in result.events:
            self._notify(event)
        return list(result.events)

    async def sync(self) -> None:
        """Coarse sync: push the full local state"""
        await self._push()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _push(self) -> None:
        """Replicate the newest local state, waiting for any push in flight"""
        async with self._push_lock:
            state = self._state
            if state is None:
                return
            if not self._remote_created:
                await self._create(state, "Failed to update timer state")
                return
            try:
                await self._store.update(state)
            except TimerNotFoundError:
                if self._state is None:
                    # Reset won the race; nothing left to replicate
                    logger.debug("Dropped timer sync for a session that was reset")
                    return
                logger.info("Store has no active session; re-creating it from local state")
                await self._create(self._state, "Failed to update timer state")
            except TimerStoreError as e:
                self._report(f"Failed to update timer state: {e}")

    async def _create(self, state: TimerState, failure: str) -> None:
        """POST the session; must be called holding the push lock"""
        try:
            await self._store.create(state)
        except TimerStoreError as e:
            self._report(f"{failure}: {e}")
            return
        self._remote_created = True

    def _request_permission_once(self) -> None:
        if self._notifier is None or self._permission_requested:
            return
        self._permission_requested = True
        if self._notifier.permission is NotificationPermission.UNSET:
            self._notifier.request_permission()

    def _notify(self, event: TimerEvent) -> None:
        if self._notifier is None:
            return
        self._notifier.notify(event.title, event.body)

    def _report(self, message: str) -> None:
        self.last_error = message
        logger.warning(message)
        if self._on_error:
            self._on_error(message)
