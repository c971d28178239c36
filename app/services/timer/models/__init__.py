from .timer_event import AdvanceResult, TimerEvent, TimerEventType

__all__ = ["AdvanceResult", "TimerEvent", "TimerEventType"]
