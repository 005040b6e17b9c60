"""Protocol for periodic elapsed-time ticks."""

from collections.abc import Callable
from typing import Protocol


class TickerProtocol(Protocol):
    """Protocol for a periodic timer driving the meter clock."""

    def start(self, on_tick: Callable[[], None]) -> None:
        """Start calling ``on_tick`` once per interval."""
        ...

    def stop(self) -> None:
        """Stop ticking. Safe to call when not running."""
        ...
