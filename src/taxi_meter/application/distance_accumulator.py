"""Distance tracking for a single hired trip."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from taxi_meter.domain.models import Coordinate, PositionOptions

if TYPE_CHECKING:
    from taxi_meter.domain.ports import PositionSource

logger = logging.getLogger(__name__)

UNSUPPORTED_MESSAGE = "Geolocation is not supported by this device"

INITIAL_FIX_OPTIONS = PositionOptions(high_accuracy=True, timeout_ms=10_000, max_cache_age_ms=0)
WATCH_OPTIONS = PositionOptions(high_accuracy=True, timeout_ms=5_000, max_cache_age_ms=1_000)


class DistanceAccumulator:
    """Feeds position fixes and failures for one trip into the fare session.

    On ``start`` it asks for a one-shot fix (which becomes the trip origin) and
    registers a continuous watch. Every fix and every failure is forwarded to the
    callbacks given at construction; the session turns fixes into straight-line
    displacement from the origin and failures into a small synthetic step.
    Nothing is forwarded once ``stop`` has been called.
    """

    def __init__(
        self,
        position_source: PositionSource | None,
        on_initial_fix: Callable[[Coordinate], None],
        on_update: Callable[[Coordinate], None],
        on_error: Callable[[str], None],
        initial_options: PositionOptions = INITIAL_FIX_OPTIONS,
        watch_options: PositionOptions = WATCH_OPTIONS,
    ) -> None:
        """Initialize the accumulator.

        Args:
            position_source: Positioning capability, or None when the device has none.
            on_initial_fix: Receives the one-shot fix that marks the trip origin.
            on_update: Receives every fix from the continuous watch.
            on_error: Receives a human-readable message for each failure.
            initial_options: Options for the one-shot request.
            watch_options: Options for the continuous watch.
        """
        self.position_source = position_source
        self.initial_options = initial_options
        self.watch_options = watch_options
        self._on_initial_fix = on_initial_fix
        self._on_update = on_update
        self._on_error = on_error
        self._watch_handle: int | None = None
        self._active = False

    @property
    def is_active(self) -> bool:
        """True between ``start`` and ``stop``."""
        return self._active

    def start(self) -> None:
        """Request the origin fix and begin watching for position changes."""
        if self._active:
            logger.warning("Distance accumulator already running")
            return
        self._active = True

        if self.position_source is None:
            logger.warning(UNSUPPORTED_MESSAGE)
            self._handle_error(UNSUPPORTED_MESSAGE)
            return

        try:
            self.position_source.get_current_position(
                self._handle_initial_fix, self._handle_error, self.initial_options
            )
        except Exception as e:
            logger.warning(f"Initial position request failed: {e}")
            self._handle_error(str(e) or "Position request failed")

        # The initial request may have failed synchronously and the session stopped us.
        if not self._active:
            return

        try:
            self._watch_handle = self.position_source.watch_position(
                self._handle_update, self._handle_error, self.watch_options
            )
            logger.debug(f"Registered position watch {self._watch_handle}")
        except Exception as e:
            logger.warning(f"Position watch could not be registered: {e}")
            self._handle_error(str(e) or "Position watch failed")

    def stop(self) -> None:
        """Cancel the position watch. Safe to call repeatedly or before ``start``."""
        self._active = False
        if self._watch_handle is None or self.position_source is None:
            return
        handle, self._watch_handle = self._watch_handle, None
        try:
            self.position_source.clear_watch(handle)
            logger.debug(f"Cleared position watch {handle}")
        except Exception as e:
            logger.warning(f"Failed to clear position watch {handle}: {e}")

    def _handle_initial_fix(self, coordinate: Coordinate) -> None:
        if not self._active:
            logger.debug("Ignoring initial fix delivered after stop")
            return
        self._on_initial_fix(coordinate)

    def _handle_update(self, coordinate: Coordinate) -> None:
        if not self._active:
            logger.debug("Ignoring position update delivered after stop")
            return
        self._on_update(coordinate)

    def _handle_error(self, message: str) -> None:
        if not self._active:
            logger.debug(f"Ignoring positioning error delivered after stop: {message}")
            return
        self._on_error(message)
