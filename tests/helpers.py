"""Shared test helpers for the timer tests."""

import httpx

from app.features.timer.domain import TimerMode, TimerState
from app.services.timer.notifier import NotificationPermission, Notifier


class FakeClock:
    """Monotonic clock the test moves by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingNotifier(Notifier):
    """Notifier that remembers prompts and shown notifications."""

    def __init__(
        self,
        permission: NotificationPermission = NotificationPermission.UNSET,
        answer: NotificationPermission = NotificationPermission.GRANTED,
    ):
        super().__init__(permission)
        self.answer = answer
        self.prompts = 0
        self.shown: list = []

    def _prompt(self) -> NotificationPermission:
        self.prompts += 1
        return self.answer

    def _show(self, title: str, body: str) -> None:
        self.shown.append((title, body))

    @property
    def titles(self) -> list:
        return [title for title, _ in self.shown]


def make_state(
    work: int = 100,
    play: int = 100,
    mode: TimerMode = TimerMode.WORK,
    running: bool = True,
    total: int | None = None,
) -> TimerState:
    """Build a state; the total defaults to the smallest one fitting both counters."""
    if total is None:
        total = max(work, play, 1) * 2
    return TimerState(
        total_seconds=total,
        work_seconds_remaining=work,
        play_seconds_remaining=play,
        current_mode=mode,
        is_running=running,
    )


class RefusingTransport(httpx.AsyncBaseTransport):
    """Transport that refuses the first ``failures`` requests of one method and forwards the rest."""

    def __init__(self, inner: httpx.AsyncBaseTransport, method: str, failures: int = 1):
        self.inner = inner
        self.method = method
        self.failures = failures

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        if request.method == self.method and self.failures > 0:
            self.failures -= 1
            raise httpx.ConnectError("connection refused", request=request)
        return await self.inner.handle_async_request(request)
