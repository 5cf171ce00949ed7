import asyncio
import logging

import pytest

from break_reminder.timers import DelayedAction


@pytest.mark.asyncio
async def test_action_runs_after_its_delay(instant_sleep):
    fired = []
    action = DelayedAction("test", 30, lambda: fired.append(True), sleep=instant_sleep)

    await action.wait()

    assert fired == [True]
    assert instant_sleep.calls == [30]
    assert action.done() and not action.cancelled()


@pytest.mark.asyncio
async def test_cancelled_action_never_runs():
    fired = []
    action = DelayedAction("test", 60, lambda: fired.append(True))

    assert action.cancel() is True
    await action.wait()

    assert fired == []
    assert action.cancelled()
    assert action.cancel() is False


@pytest.mark.asyncio
async def test_callback_failure_is_logged_not_raised(instant_sleep, caplog):
    def boom():
        raise RuntimeError("window went away")

    action = DelayedAction("boom", 0, boom, sleep=instant_sleep)
    with caplog.at_level(logging.ERROR):
        await action.wait()

    assert "Delayed action boom failed" in caplog.text
    assert "window went away" in caplog.text


@pytest.mark.asyncio
async def test_scheduling_does_not_block_the_caller():
    fired = []
    action = DelayedAction("slow", 3600, lambda: fired.append(True))

    await asyncio.sleep(0)

    assert not action.done()
    assert fired == []
    action.cancel()
