"""Ticker advanced explicitly by the caller."""

from __future__ import annotations

import logging
from collections.abc import Callable

from taxi_meter.domain.contracts.ticker import TickerProtocol

logger = logging.getLogger(__name__)


class ManualTicker(TickerProtocol):
    """Fires ticks only when ``advance`` is called; used for replay and tests."""

    def __init__(self) -> None:
        self._on_tick: Callable[[], None] | None = None
        self.ticks_delivered = 0

    @property
    def is_running(self) -> bool:
        return self._on_tick is not None

    def start(self, on_tick: Callable[[], None]) -> None:
        """Remember the callback until ``stop``."""
        if self._on_tick is not None:
            logger.warning("Ticker already running")
            return
        self._on_tick = on_tick

    def stop(self) -> None:
        """Forget the callback."""
        self._on_tick = None

    def advance(self, ticks: int = 1) -> int:
        """Deliver up to ``ticks`` ticks and return how many were delivered.

        Stops early when a tick callback stops the ticker.
        """
        delivered = 0
        for _ in range(ticks):
            if self._on_tick is None:
                break
            self._on_tick()
            delivered += 1
        self.ticks_delivered += delivered
        return delivered
