"""Timer transition event models"""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from app.features.timer.domain import TimerMode, TimerState


class TimerEventType(str, Enum):
    """Transition emitted by the engine"""
    MODE_COMPLETE = "mode_complete"
    SESSION_COMPLETE = "session_complete"


class TimerEvent(BaseModel):
    """A transition worth telling the user about"""
    model_config = ConfigDict(frozen=True)

    type: TimerEventType
    completed_mode: Optional[TimerMode] = None  # Mode whose budget ran out (MODE_COMPLETE only)
    title: str
    body: str


class AdvanceResult(BaseModel):
    """Next state plus the transitions that produced it, in order"""
    model_config = ConfigDict(frozen=True)

    state: TimerState
    events: List[TimerEvent] = []
