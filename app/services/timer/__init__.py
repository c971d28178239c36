"""Client-side work/play timer: engine, driver and store client"""

from .driver import DriverStatus, TimerDriver
from .engine import advance, new_session, switch_mode, toggle_running
from .models.timer_event import AdvanceResult, TimerEvent, TimerEventType
from .notifier import LogNotifier, NotificationPermission, Notifier
from .scheduler import PeriodicTask
from .store_client import (
    TimerNotFoundError,
    TimerStoreClient,
    TimerStoreError,
    TimerValidationError,
)
from .view import TimerView, build_timer_view, format_duration, progress_percent

__all__ = [
    "DriverStatus",
    "TimerDriver",
    "advance",
    "new_session",
    "switch_mode",
    "toggle_running",
    "AdvanceResult",
    "TimerEvent",
    "TimerEventType",
    "LogNotifier",
    "NotificationPermission",
    "Notifier",
    "PeriodicTask",
    "TimerNotFoundError",
    "TimerStoreClient",
    "TimerStoreError",
    "TimerValidationError",
    "TimerView",
    "build_timer_view",
    "format_duration",
    "progress_percent",
]
