"""Repeating timer implementations."""

import asyncio
import itertools
import logging
import sys
from typing import Any, Awaitable, Callable, Optional

logger = logging.getLogger(__name__)


Callback = Callable[[], Awaitable[None]]


class AsyncioTimer:
    """Repeating timer backed by one asyncio task per handle.

    Each tick spawns the callback as its own task, so a slow callback
    never delays the next tick. Disarming cancels the ticking loop only;
    callbacks already spawned run to completion.
    """

    def __init__(self) -> None:
        self._loops: dict[int, asyncio.Task] = {}
        self._firings: set[asyncio.Task] = set()
        self._ids = itertools.count(1)

    def arm(self, period_ms: int, callback: Callback) -> int:
        """Start calling ``callback`` every ``period_ms`` milliseconds.

        Periods below 1 ms are treated as 1 ms. Must be called with a
        running event loop.
        """
        handle = next(self._ids)
        period = max(period_ms, 1) / 1000
        self._loops[handle] = asyncio.get_running_loop().create_task(
            self._tick(period, callback),
            name=f"timer-{handle}",
        )
        return handle

    def disarm(self, handle: Any) -> None:
        """Cancel the loop behind ``handle``."""
        task = self._loops.pop(handle, None)
        if task is not None:
            task.cancel()

    @property
    def active(self) -> int:
        """Number of armed handles."""
        return len(self._loops)

    async def _tick(self, period: float, callback: Callback) -> None:
        while True:
            await asyncio.sleep(period)
            firing = asyncio.ensure_future(callback())
            self._firings.add(firing)
            firing.add_done_callback(self._firings.discard)


class APSchedulerTimer:
    """Repeating timer backed by APScheduler's AsyncIOScheduler.

    Requires APScheduler 3.x to be installed.
    """

    def __init__(self, timezone: str = "UTC", scheduler: Optional[Any] = None):
        """Initialize timer.

        Args:
            timezone: Timezone handed to APScheduler
            scheduler: Optional pre-built scheduler for testing
        """
        self._timezone = timezone
        self._scheduler = scheduler
        self._ids = itertools.count(1)

    def _get_scheduler(self) -> Any:
        if self._scheduler is None:
            try:
                from apscheduler.schedulers.asyncio import AsyncIOScheduler
            except ImportError:
                raise ImportError(
                    "APScheduler is required. Install with: pip install 'apscheduler<4'"
                )
            self._scheduler = AsyncIOScheduler(timezone=self._timezone)
        if not self._scheduler.running:
            self._scheduler.start()
            logger.info("APScheduler started")
        return self._scheduler

    def arm(self, period_ms: int, callback: Callback) -> str:
        """Add an interval job that calls ``callback`` every ``period_ms``."""
        from apscheduler.triggers.interval import IntervalTrigger

        scheduler = self._get_scheduler()
        handle = f"timer-{next(self._ids)}"
        scheduler.add_job(
            callback,
            trigger=IntervalTrigger(
                seconds=max(period_ms, 1) / 1000,
                timezone=self._timezone,
            ),
            id=handle,
            max_instances=sys.maxsize,
            coalesce=False,
        )
        logger.debug(f"Armed {handle} every {period_ms} ms")
        return handle

    def disarm(self, handle: Any) -> None:
        """Remove the interval job behind ``handle``."""
        if self._scheduler is None:
            return

        from apscheduler.jobstores.base import JobLookupError

        try:
            self._scheduler.remove_job(handle)
        except JobLookupError:
            logger.debug(f"Timer {handle} already gone")

    def shutdown(self) -> None:
        """Shut down the underlying scheduler."""
        if self._scheduler is not None and self._scheduler.running:
            self._scheduler.shutdown(wait=False)
            logger.info("APScheduler stopped")
