"""Progress reporting for long-running conversions."""

import asyncio
import logging
from contextlib import suppress
from typing import Optional


class ProgressReporter:
    """
    Async context manager that logs a heartbeat while work is in flight.

    Usage::

        async with ProgressReporter(interval=5.0):
            await long_running_conversion()

    An interval of zero or less disables reporting.
    """

    def __init__(self, interval: float = 5.0, message: str = "Loading...",
                 logger: Optional[logging.Logger] = None):
        self.interval = interval
        self.message = message
        self.logger = logger or logging.getLogger(__name__)
        self.ticks = 0
        self._task: Optional[asyncio.Task] = None

    async def __aenter__(self) -> "ProgressReporter":
        if self.interval > 0:
            self._task = asyncio.create_task(self._report())
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._task is not None:
            self._task.cancel()
            with suppress(asyncio.CancelledError):
                await self._task
            self._task = None

    async def _report(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            self.ticks += 1
            self.logger.info(self.message)
