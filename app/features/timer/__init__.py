"""Work/play timer feature module"""

from app.features.timer.api import router
from app.features.timer.repository import TimerSessionRepository
from app.features.timer.service import TimerSessionService
from app.features.timer.domain import (
    TimerMode,
    TimerSession,
    TimerSessionCreate,
    TimerSessionUpdate,
    TimerState,
)

__all__ = [
    "router",
    "TimerSessionRepository",
    "TimerSessionService",
    "TimerMode",
    "TimerSession",
    "TimerSessionCreate",
    "TimerSessionUpdate",
    "TimerState",
]
