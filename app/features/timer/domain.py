"""Domain models for the work/play timer feature"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, model_validator
from pydantic.alias_generators import to_camel


class TimerMode(str, Enum):
    """Which half of the session is counting down"""
    WORK = "work"
    PLAY = "play"

    def other(self) -> "TimerMode":
        return TimerMode.PLAY if self is TimerMode.WORK else TimerMode.WORK


class CamelModel(BaseModel):
    """Base model exposing camelCase names on the wire"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TimerState(CamelModel):
    """
    The client-owned part of a timer session.

    Immutable: the engine and the user actions return new instances.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    total_seconds: StrictInt = Field(gt=0)
    work_seconds_remaining: StrictInt = Field(ge=0)
    play_seconds_remaining: StrictInt = Field(ge=0)
    current_mode: TimerMode
    is_running: StrictBool

    @model_validator(mode="after")
    def _within_half_budget(self) -> "TimerState":
        half = self.total_seconds // 2
        if self.work_seconds_remaining > half:
            raise ValueError(f"workSecondsRemaining must not exceed half of totalSeconds ({half})")
        if self.play_seconds_remaining > half:
            raise ValueError(f"playSecondsRemaining must not exceed half of totalSeconds ({half})")
        return self

    @property
    def half_budget(self) -> int:
        """Initial budget of each mode"""
        return self.total_seconds // 2

    @property
    def is_complete(self) -> bool:
        return self.work_seconds_remaining == 0 and self.play_seconds_remaining == 0

    def remaining_for(self, mode: TimerMode) -> int:
        if mode is TimerMode.WORK:
            return self.work_seconds_remaining
        return self.play_seconds_remaining

    def to_state(self) -> "TimerState":
        """Strip any store-managed fields"""
        return TimerState(
            total_seconds=self.total_seconds,
            work_seconds_remaining=self.work_seconds_remaining,
            play_seconds_remaining=self.play_seconds_remaining,
            current_mode=self.current_mode,
            is_running=self.is_running,
        )


class TimerSessionCreate(TimerState):
    """Timer session creation model (POST body)"""
    pass


class TimerSessionUpdate(CamelModel):
    """Timer session update model - all fields optional, nothing else accepted"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    work_seconds_remaining: Optional[StrictInt] = Field(default=None, ge=0)
    play_seconds_remaining: Optional[StrictInt] = Field(default=None, ge=0)
    current_mode: Optional[TimerMode] = None
    is_running: Optional[StrictBool] = None

    @model_validator(mode="after")
    def _no_explicit_nulls(self) -> "TimerSessionUpdate":
        for name in self.model_fields_set:
            if getattr(self, name) is None:
                raise ValueError(f"{to_camel(name)} must not be null")
        return self

    @classmethod
    def from_state(cls, state: TimerState) -> "TimerSessionUpdate":
        """Full-state update, as pushed by the client on every sync"""
        return cls(
            work_seconds_remaining=state.work_seconds_remaining,
            play_seconds_remaining=state.play_seconds_remaining,
            current_mode=state.current_mode,
            is_running=state.is_running,
        )


class TimerSession(TimerState):
    """Complete timer session domain model, including store-managed fields"""
    id: int
    user_id: int
    created_at: datetime
    updated_at: datetime
