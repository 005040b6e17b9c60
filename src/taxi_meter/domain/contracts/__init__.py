"""Domain contracts (protocols) for session collaborators."""

from taxi_meter.domain.contracts.readout_publisher import ReadoutPublisherProtocol
from taxi_meter.domain.contracts.ticker import TickerProtocol

__all__ = [
    "ReadoutPublisherProtocol",
    "TickerProtocol",
]
