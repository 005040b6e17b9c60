"""Position source port."""

from collections.abc import Callable
from typing import Protocol

from taxi_meter.domain.models.coordinate import Coordinate
from taxi_meter.domain.models.position_options import PositionOptions

PositionCallback = Callable[[Coordinate], None]
PositionErrorCallback = Callable[[str], None]


class PositionSource(Protocol):
    """Port for the device's location-sensing capability.

    Requests never block: results are delivered later through the callbacks.
    A denied or unsupported request is reported through ``on_error`` and is
    never raised to the caller.
    """

    def get_current_position(
        self,
        on_success: PositionCallback,
        on_error: PositionErrorCallback,
        options: PositionOptions,
    ) -> None:
        """Request a single position fix."""
        ...

    def watch_position(
        self,
        on_update: PositionCallback,
        on_error: PositionErrorCallback,
        options: PositionOptions,
    ) -> int:
        """Start continuous observation and return a handle for ``clear_watch``."""
        ...

    def clear_watch(self, handle: int) -> None:
        """Stop the observation registered under ``handle``; unknown handles are ignored."""
        ...
