"""Cancellable periodic task on the running asyncio loop"""
import asyncio
import inspect
import logging
from typing import Awaitable, Callable, Optional, Union

logger = logging.getLogger(__name__)

Callback = Callable[[], Union[None, Awaitable[None]]]


class PeriodicTask:
    """
    Repeatedly invoke a callback every ``interval`` seconds.

    The first call happens one interval after ``start()``. Callbacks may be
    plain functions or coroutine functions; an async callback is awaited
    before the next interval begins, so invocations never overlap. A callback
    that raises is logged and the loop keeps going.
    """

    def __init__(self, interval: float, callback: Callback, name: str = "periodic"):
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.interval = interval
        self.name = name
        self._callback = callback
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Schedule the loop; no-op if it is already running"""
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run(), name=self.name)
        logger.debug(f"Periodic task '{self.name}' started ({self.interval}s)")

    def stop(self) -> None:
        """Cancel the loop; no-op if it is not running"""
        if self._task is None:
            return
        task, self._task = self._task, None
        # Stopping from inside the callback must not cancel the caller itself
        if task is not asyncio.current_task():
            task.cancel()
        logger.debug(f"Periodic task '{self.name}' stopped")

    async def _run(self) -> None:
        me = asyncio.current_task()
        while self._task is me:
            await asyncio.sleep(self.interval)
            if self._task is not me:
                break
            try:
                result = self._callback()
                if inspect.isawaitable(result):
                    await result
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error(f"Periodic task '{self.name}' callback failed: {e}", exc_info=True)
