"""
Timer Engine - pure state transitions for a work/play session

The engine never performs I/O and never suspends. ``advance`` moves a session
forward by whole elapsed seconds; ``new_session``, ``toggle_running`` and
``switch_mode`` are the user actions. Every function returns a new
``TimerState`` and leaves its input untouched.
"""
import logging
import math
from typing import List

from app.features.timer.domain import TimerMode, TimerState
from .models.timer_event import AdvanceResult, TimerEvent, TimerEventType

logger = logging.getLogger(__name__)

SECONDS_PER_HOUR = 3600
MIN_TOTAL_HOURS = 0.5
MAX_TOTAL_HOURS = 24
HOURS_RANGE_MESSAGE = f"Please enter a number between {MIN_TOTAL_HOURS} and {MAX_TOTAL_HOURS} hours."

_MODE_COMPLETE_COPY = {
    TimerMode.WORK: ("Work time complete!", "Time to switch to play mode."),
    TimerMode.PLAY: ("Play time complete!", "Time to switch to work mode."),
}
_SESSION_COMPLETE_COPY = ("Timer Complete!", "Both work and play times are complete.")


def mode_complete_event(mode: TimerMode) -> TimerEvent:
    title, body = _MODE_COMPLETE_COPY[mode]
    return TimerEvent(
        type=TimerEventType.MODE_COMPLETE,
        completed_mode=mode,
        title=title,
        body=body,
    )


def session_complete_event() -> TimerEvent:
    title, body = _SESSION_COMPLETE_COPY
    return TimerEvent(type=TimerEventType.SESSION_COMPLETE, title=title, body=body)


def advance(state: TimerState, elapsed_seconds: float) -> AdvanceResult:
    """
    Advance a session by measured elapsed time.

    Args:
        state: Current session state
        elapsed_seconds: Wall-clock seconds since the last tick; fractions are floored

    Returns:
        AdvanceResult with the next state and any MODE_COMPLETE / SESSION_COMPLETE events

    Rules:
        - Paused sessions and sub-second ticks are returned unchanged
        - Only the current mode's counter decrements, clamped at 0
        - Excess elapsed time is dropped, never carried into the other mode
        - Auto-switch when the current counter hits 0 and the other is > 0
        - Completion (both counters 0) is checked after the auto-switch
    """
    if not state.is_running:
        return AdvanceResult(state=state)

    elapsed = math.floor(elapsed_seconds)
    if elapsed < 1:
        return AdvanceResult(state=state)

    mode = state.current_mode
    remaining = max(0, state.remaining_for(mode) - elapsed)
    if mode is TimerMode.WORK:
        work, play = remaining, state.play_seconds_remaining
    else:
        work, play = state.work_seconds_remaining, remaining

    events: List[TimerEvent] = []
    next_mode = mode
    is_running = True

    other = mode.other()
    other_remaining = play if other is TimerMode.PLAY else work
    if remaining == 0 and other_remaining > 0:
        next_mode = other
        events.append(mode_complete_event(mode))
        logger.info(f"{mode.value} budget exhausted, switching to {other.value}")

    if work == 0 and play == 0:
        is_running = False
        events.append(session_complete_event())
        logger.info("Both budgets exhausted, session complete")

    next_state = state.model_copy(
        update={
            "work_seconds_remaining": work,
            "play_seconds_remaining": play,
            "current_mode": next_mode,
            "is_running": is_running,
        }
    )
    return AdvanceResult(state=next_state, events=events)


def new_session(total_hours: float) -> TimerState:
    """
    Build a fresh running session in work mode.

    Both halves get floor(total_seconds / 2), so an odd total loses one second.

    Raises:
        ValueError: If total_hours is outside MIN_TOTAL_HOURS..MAX_TOTAL_HOURS
    """
    # NaN fails both comparisons
    if isinstance(total_hours, bool) or not (MIN_TOTAL_HOURS <= total_hours <= MAX_TOTAL_HOURS):
        raise ValueError(HOURS_RANGE_MESSAGE)

    total_seconds = math.floor(total_hours * SECONDS_PER_HOUR)

    half = total_seconds // 2
    return TimerState(
        total_seconds=total_seconds,
        work_seconds_remaining=half,
        play_seconds_remaining=half,
        current_mode=TimerMode.WORK,
        is_running=True,
    )


def toggle_running(state: TimerState) -> TimerState:
    """Pause a running session or resume a paused one; counters untouched"""
    return state.model_copy(update={"is_running": not state.is_running})


def switch_mode(state: TimerState) -> TimerState:
    """
    Flip to the other mode and force running.

    The target counter may already be 0; the next tick then switches back or
    completes.
    """
    return state.model_copy(
        update={"current_mode": state.current_mode.other(), "is_running": True}
    )
