"""Tests for the cancellable periodic task and the live tick loop."""

import asyncio

import pytest

from app.services.timer.driver import TimerDriver
from app.services.timer.scheduler import PeriodicTask


async def wait_for(predicate, timeout=2.0):
    deadline = asyncio.get_running_loop().time() + timeout
    while not predicate():
        if asyncio.get_running_loop().time() > deadline:
            raise AssertionError("condition not reached in time")
        await asyncio.sleep(0.005)


async def test_runs_repeatedly_until_stopped():
    calls = []
    task = PeriodicTask(0.01, lambda: calls.append(1), name="test")
    task.start()
    await wait_for(lambda: len(calls) >= 3)
    task.stop()
    assert not task.running

    count = len(calls)
    await asyncio.sleep(0.05)
    assert len(calls) == count


async def test_start_is_idempotent():
    calls = []
    task = PeriodicTask(0.01, lambda: calls.append(1))
    task.start()
    first = task._task
    task.start()
    assert task._task is first
    task.stop()


async def test_awaits_async_callback():
    calls = []

    async def callback():
        await asyncio.sleep(0)
        calls.append(1)

    task = PeriodicTask(0.01, callback)
    task.start()
    await wait_for(lambda: len(calls) >= 2)
    task.stop()


async def test_failing_callback_keeps_running():
    calls = []

    def callback():
        calls.append(1)
        raise RuntimeError("boom")

    task = PeriodicTask(0.01, callback)
    task.start()
    await wait_for(lambda: len(calls) >= 2)
    assert task.running
    task.stop()


async def test_stop_from_inside_callback():
    calls = []
    task = PeriodicTask(0.01, lambda: (calls.append(1), task.stop()))
    task.start()
    await wait_for(lambda: len(calls) >= 1)
    await asyncio.sleep(0.05)
    assert calls == [1]
    assert not task.running


def test_rejects_non_positive_interval():
    with pytest.raises(ValueError):
        PeriodicTask(0, lambda: None)


async def test_driver_tick_loop_advances_on_its_own(store, clock):
    driver = TimerDriver(store, clock=clock, tick_interval=0.01, sync_interval=3600)
    await driver.start(1)
    clock.advance(3)
    await wait_for(lambda: driver.state.work_seconds_remaining == 1797)
    await driver.aclose()
    assert not driver.ticking


async def test_pause_stops_live_tick_loop(store, clock):
    driver = TimerDriver(store, clock=clock, tick_interval=0.01, sync_interval=3600)
    await driver.start(1)
    clock.advance(3)
    await wait_for(lambda: driver.state.work_seconds_remaining == 1797)

    await driver.pause_resume()
    assert not driver.ticking
    clock.advance(5)
    await asyncio.sleep(0.05)
    assert driver.state.work_seconds_remaining == 1797
    assert driver.state.is_running is False
    await driver.aclose()
