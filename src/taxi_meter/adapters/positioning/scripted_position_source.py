"""Position source driven synchronously by the caller."""

from __future__ import annotations

import itertools
import logging

from taxi_meter.domain.models import Coordinate, PositionOptions
from taxi_meter.domain.ports import PositionCallback, PositionErrorCallback, PositionSource

logger = logging.getLogger(__name__)


class ScriptedPositionSource(PositionSource):
    """Delivers fixes and failures exactly when ``emit_fix``/``emit_error`` are called.

    One-shot requests are answered immediately when a fix is already known (or
    the source is denied); otherwise they wait for the next emitted fix or error.
    """

    def __init__(self, denied_message: str | None = None) -> None:
        """Initialize the source.

        Args:
            denied_message: When set, every request fails with this message.
        """
        self.denied_message = denied_message
        self.current: Coordinate | None = None
        self.requested_options: list[PositionOptions] = []
        self._pending: list[tuple[PositionCallback, PositionErrorCallback]] = []
        self._watches: dict[int, tuple[PositionCallback, PositionErrorCallback]] = {}
        self._handles = itertools.count(1)

    @property
    def watch_count(self) -> int:
        """Number of watches currently registered."""
        return len(self._watches)

    def get_current_position(
        self,
        on_success: PositionCallback,
        on_error: PositionErrorCallback,
        options: PositionOptions,
    ) -> None:
        self.requested_options.append(options)
        if self.denied_message is not None:
            on_error(self.denied_message)
        elif self.current is not None:
            on_success(self.current)
        else:
            self._pending.append((on_success, on_error))

    def watch_position(
        self,
        on_update: PositionCallback,
        on_error: PositionErrorCallback,
        options: PositionOptions,
    ) -> int:
        self.requested_options.append(options)
        handle = next(self._handles)
        self._watches[handle] = (on_update, on_error)
        if self.denied_message is not None:
            on_error(self.denied_message)
        return handle

    def clear_watch(self, handle: int) -> None:
        if self._watches.pop(handle, None) is None:
            logger.debug(f"clear_watch called with unknown handle {handle}")

    def emit_fix(self, coordinate: Coordinate) -> None:
        """Publish a new fix to pending one-shot requests, then to every watch."""
        self.current = coordinate
        pending, self._pending = self._pending, []
        for on_success, _ in pending:
            on_success(coordinate)
        for on_update, _ in list(self._watches.values()):
            on_update(coordinate)

    def emit_error(self, message: str) -> None:
        """Fail pending one-shot requests and report the failure to every watch."""
        pending, self._pending = self._pending, []
        for _, on_error in pending:
            on_error(message)
        for _, on_error in list(self._watches.values()):
            on_error(message)
