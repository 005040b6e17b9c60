"""Position source for devices whose positioning is denied or unavailable."""

from __future__ import annotations

import asyncio
import itertools
import logging

from taxi_meter.domain.models import PositionOptions
from taxi_meter.domain.ports import PositionCallback, PositionErrorCallback, PositionSource

logger = logging.getLogger(__name__)


class UnavailablePositionSource(PositionSource):
    """Never produces a fix.

    The one-shot request fails right away and every watch reports a failure once
    per timeout period, which keeps the synthetic distance fallback running.
    """

    def __init__(self, message: str = "Position unavailable") -> None:
        self.message = message
        self._watches: dict[int, asyncio.Task] = {}
        self._handles = itertools.count(1)

    def get_current_position(
        self,
        on_success: PositionCallback,  # noqa: ARG002
        on_error: PositionErrorCallback,
        options: PositionOptions,  # noqa: ARG002
    ) -> None:
        asyncio.get_running_loop().call_soon(on_error, self.message)

    def watch_position(
        self,
        on_update: PositionCallback,  # noqa: ARG002
        on_error: PositionErrorCallback,
        options: PositionOptions,
    ) -> int:
        handle = next(self._handles)
        self._watches[handle] = asyncio.get_running_loop().create_task(
            self._fail_periodically(on_error, options.timeout_ms / 1000)
        )
        return handle

    def clear_watch(self, handle: int) -> None:
        task = self._watches.pop(handle, None)
        if task is not None and not task.done():
            task.cancel()

    async def _fail_periodically(self, on_error: PositionErrorCallback, interval: float) -> None:
        while True:
            await asyncio.sleep(interval)
            logger.debug(f"Watch timed out: {self.message}")
            on_error(self.message)
