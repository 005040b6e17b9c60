"""Protocol for publishing meter readouts."""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from taxi_meter.domain.models.meter_readout import MeterReadout


class ReadoutPublisherProtocol(Protocol):
    """Protocol for consumers that render or forward meter readouts."""

    def publish(self, readout: "MeterReadout") -> None:
        """Receive the latest readout.

        Args:
            readout: Snapshot of the meter after a state change.
        """
        ...
