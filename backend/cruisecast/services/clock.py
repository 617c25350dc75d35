from __future__ import annotations
from typing import Callable, Optional
import asyncio

from cruisecast.core.logger import get_logger

logger = get_logger(__name__)


class TickClock:
    """Calls `callback` every `interval_s` seconds on the running event loop.

    Callbacks run on the loop thread one at a time. stop() is idempotent and
    no callback runs after it returns.
    """

    def __init__(self, callback: Callable[[], object], interval_s: float):
        if interval_s <= 0:
            raise ValueError("interval_s must be positive")
        self.callback = callback
        self.interval_s = interval_s
        self._task: Optional[asyncio.Task] = None
        self._stopped = True

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done() and not self._stopped

    def start(self) -> None:
        if self.running:
            return
        loop = asyncio.get_running_loop()
        self._stopped = False
        self._task = loop.create_task(self._run())
        logger.info("Tick clock started (%.0f ms)", self.interval_s * 1000)

    def stop(self) -> None:
        if self._stopped:
            return
        self._stopped = True
        if self._task is not None and not self._task.done():
            self._task.cancel()
        logger.info("Tick clock stopped")

    async def wait_stopped(self) -> None:
        task = self._task
        if task is None:
            return
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _run(self) -> None:
        while not self._stopped:
            await asyncio.sleep(self.interval_s)
            if self._stopped:
                break
            try:
                self.callback()
            except Exception:
                logger.exception("Tick callback failed; stopping clock")
                self._stopped = True
                return
