"""Display values derived from timer state"""
from typing import Optional

from pydantic import BaseModel

from app.features.timer.domain import TimerMode, TimerState


class TimerView(BaseModel):
    """What a presentation layer renders for the current session"""
    active: bool
    mode: TimerMode
    is_running: bool
    current_time: str
    total_time: str
    work_time_remaining: str
    play_time_remaining: str
    percentage_complete: float
    work_progress: float
    play_progress: float


def format_duration(seconds: int) -> str:
    """Format whole seconds as HH:MM:SS"""
    seconds = max(0, int(seconds))
    h, rest = divmod(seconds, 3600)
    m, s = divmod(rest, 60)
    return f"{h:02d}:{m:02d}:{s:02d}"


def progress_percent(initial: int, remaining: int) -> float:
    """Share of a budget already used, 0-100"""
    if initial <= 0:
        return 0.0
    used = initial - remaining
    return max(0.0, min(100.0, used / initial * 100))


def build_timer_view(state: Optional[TimerState]) -> TimerView:
    if state is None:
        zero = format_duration(0)
        return TimerView(
            active=False,
            mode=TimerMode.WORK,
            is_running=False,
            current_time=zero,
            total_time=zero,
            work_time_remaining=zero,
            play_time_remaining=zero,
            percentage_complete=0.0,
            work_progress=0.0,
            play_progress=0.0,
        )

    half = state.half_budget
    work_progress = progress_percent(half, state.work_seconds_remaining)
    play_progress = progress_percent(half, state.play_seconds_remaining)
    return TimerView(
        active=True,
        mode=state.current_mode,
        is_running=state.is_running,
        current_time=format_duration(state.remaining_for(state.current_mode)),
        total_time=format_duration(half),
        work_time_remaining=format_duration(state.work_seconds_remaining),
        play_time_remaining=format_duration(state.play_seconds_remaining),
        percentage_complete=work_progress if state.current_mode is TimerMode.WORK else play_progress,
        work_progress=work_progress,
        play_progress=play_progress,
    )
