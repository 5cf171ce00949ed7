"""One-shot delayed actions on the running asyncio loop."""
import asyncio
import logging
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)

SleepFn = Callable[[float], Awaitable[None]]


class DelayedAction:
    """
    Owned, cancellable handle for a callback that runs after ``delay`` seconds.

    The task is fire-and-forget from the scheduler's point of view: nothing
    waits on it, and an exception raised by the callback is logged here
    instead of propagating.
    """

    def __init__(
        self,
        name: str,
        delay: float,
        callback: Callable[[], None],
        *,
        sleep: SleepFn = asyncio.sleep,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        self.name = name
        self.delay = delay
        self._callback = callback
        self._sleep = sleep
        loop = loop or asyncio.get_running_loop()
        self._task = loop.create_task(self._run(), name=name)

    async def _run(self) -> None:
        logger.info("Timer %s started for %s seconds", self.name, self.delay)
        await self._sleep(self.delay)
        logger.info("Timer %s fired", self.name)
        try:
            self._callback()
        except Exception:
            logger.exception("Delayed action %s failed", self.name)

    def cancel(self) -> bool:
        """Cancel if still pending. Returns True if the callback will no longer run."""
        if self._task.done():
            return False
        self._task.cancel()
        logger.info("Timer %s cancelled", self.name)
        return True

    def done(self) -> bool:
        return self._task.done()

    def cancelled(self) -> bool:
        return self._task.cancelled()

    async def wait(self) -> None:
        """Wait for the action to finish; a cancelled action counts as finished."""
        try:
            await self._task
        except asyncio.CancelledError:
            if not self._task.cancelled():
                raise
