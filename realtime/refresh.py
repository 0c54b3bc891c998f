import asyncio
import logging
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)


class CoalescingRefresher:
    """Runs one refresh operation for any number of triggers.

    Two independent triggers feed it: change notices (`trigger`) and a
    polling timer started with `start`. At most one refresh runs at a time;
    triggers that arrive during a run cause exactly one more run afterwards.
    Consumers must therefore tolerate seeing the same state twice.
    """

    def __init__(self, refresh: Callable[[], Awaitable[None]], interval: Optional[float] = None):
        self._refresh = refresh
        self._interval = interval
        self._running: Optional[asyncio.Task] = None
        self._poller: Optional[asyncio.Task] = None
        self._dirty = False
        self.runs = 0

    def trigger(self) -> None:
        if self._running is not None and not self._running.done():
            self._dirty = True
            return
        self._running = asyncio.ensure_future(self._drain())

    async def refresh_now(self) -> None:
        """Trigger and wait until the resulting refresh has finished."""
        self.trigger()
        await asyncio.shield(self._running)

    async def _drain(self) -> None:
        while True:
            self._dirty = False
            self.runs += 1
            try:
                await self._refresh()
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("Refresh failed")
            if not self._dirty:
                return

    async def _poll(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            self.trigger()

    def start(self) -> None:
        if self._interval and self._poller is None:
            self._poller = asyncio.ensure_future(self._poll())

    async def stop(self) -> None:
        tasks = [t for t in (self._poller, self._running) if t is not None and not t.done()]
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._poller = None
        self._running = None
