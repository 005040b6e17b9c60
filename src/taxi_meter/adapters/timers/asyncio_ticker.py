"""Asyncio-based periodic ticker."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from taxi_meter.domain.contracts.ticker import TickerProtocol

logger = logging.getLogger(__name__)


class AsyncioTicker(TickerProtocol):
    """Calls a callback every ``interval_seconds`` from a task on the running loop."""

    def __init__(self, interval_seconds: float = 1.0) -> None:
        """Initialize the ticker.

        Args:
            interval_seconds: Seconds between ticks.
        """
        self.interval_seconds = interval_seconds
        self._task: asyncio.Task | None = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, on_tick: Callable[[], None]) -> None:
        """Start the tick loop. Must be called with an event loop running."""
        if self.is_running:
            logger.warning("Ticker already running")
            return

        self._task = asyncio.get_running_loop().create_task(self._tick_loop(on_tick))
        logger.debug(f"Started ticker every {self.interval_seconds}s")

    def stop(self) -> None:
        """Cancel the tick loop; no tick is delivered after this returns."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
            logger.debug("Stopped ticker")
        self._task = None

    async def _tick_loop(self, on_tick: Callable[[], None]) -> None:
        try:
            while True:
                await asyncio.sleep(self.interval_seconds)
                try:
                    on_tick()
                except Exception as e:
                    logger.error(f"Tick callback failed: {e}", exc_info=True)
        except asyncio.CancelledError:
            logger.debug("Ticker cancelled")
            raise
