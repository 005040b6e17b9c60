"""Position source replaying a recorded track on the event loop."""

from __future__ import annotations

import asyncio
import itertools
import logging

from taxi_meter.domain.models import Coordinate, PositionOptions
from taxi_meter.domain.ports import PositionCallback, PositionErrorCallback, PositionSource

logger = logging.getLogger(__name__)

TIMEOUT_MESSAGE = "Timeout expired"
UNAVAILABLE_MESSAGE = "Position unavailable"


class TrackPositionSource(PositionSource):
    """Replays a track, honouring the time between samples divided by ``speed``.

    When the gap to the next sample exceeds the watch timeout, a timeout failure is
    reported for every elapsed timeout period, as a real receiver would while it
    waits for a fix.
    """

    def __init__(self, track: list[Coordinate], speed: float = 1.0) -> None:
        """Initialize the source.

        Args:
            track: Samples in chronological order.
            speed: Playback speed factor (2.0 replays twice as fast).
        """
        if speed <= 0:
            raise ValueError("speed must be greater than zero")
        self.track = track
        self.speed = speed
        self._watches: dict[int, asyncio.Task] = {}
        self._handles = itertools.count(1)

    @property
    def duration_seconds(self) -> float:
        """Playback time from the first to the last sample."""
        if len(self.track) < 2:
            return 0.0
        return (self.track[-1].timestamp - self.track[0].timestamp).total_seconds() / self.speed

    def get_current_position(
        self,
        on_success: PositionCallback,
        on_error: PositionErrorCallback,
        options: PositionOptions,  # noqa: ARG002
    ) -> None:
        loop = asyncio.get_running_loop()
        if not self.track:
            loop.call_soon(on_error, UNAVAILABLE_MESSAGE)
        else:
            loop.call_soon(on_success, self.track[0])

    def watch_position(
        self,
        on_update: PositionCallback,
        on_error: PositionErrorCallback,
        options: PositionOptions,
    ) -> int:
        handle = next(self._handles)
        self._watches[handle] = asyncio.get_running_loop().create_task(
            self._replay(on_update, on_error, options)
        )
        logger.debug(f"Replaying {len(self.track)} samples on watch {handle}")
        return handle

    def clear_watch(self, handle: int) -> None:
        task = self._watches.pop(handle, None)
        if task is not None and not task.done():
            task.cancel()

    async def wait_until_replayed(self) -> None:
        """Wait until every registered watch has delivered its last sample."""
        tasks = list(self._watches.values())
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    async def _replay(
        self,
        on_update: PositionCallback,
        on_error: PositionErrorCallback,
        options: PositionOptions,
    ) -> None:
        timeout = options.timeout_ms / 1000
        previous = self.track[0].timestamp if self.track else None
        for coordinate in self.track:
            remaining = (coordinate.timestamp - previous).total_seconds() / self.speed
            while remaining > timeout:
                await asyncio.sleep(timeout)
                remaining -= timeout
                on_error(TIMEOUT_MESSAGE)
            await asyncio.sleep(max(remaining, 0))
            on_update(coordinate)
            previous = coordinate.timestamp
        logger.debug("Track replay finished")
