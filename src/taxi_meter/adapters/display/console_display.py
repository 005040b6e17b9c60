"""Console display for meter readouts."""

from __future__ import annotations

import sys
from typing import TextIO

from taxi_meter.adapters.display.readout_formatter import ReadoutFormatter
from taxi_meter.domain.contracts.readout_publisher import ReadoutPublisherProtocol
from taxi_meter.domain.models import MeterReadout


class ConsoleDisplay(ReadoutPublisherProtocol):
    """Writes one formatted line per readout to a text stream."""

    def __init__(self, formatter: ReadoutFormatter, stream: TextIO | None = None) -> None:
        """Initialize the display.

        Args:
            formatter: Formatter for readout values.
            stream: Output stream, stdout by default.
        """
        self.formatter = formatter
        self.stream = stream if stream is not None else sys.stdout
        self.last_readout: MeterReadout | None = None

    def publish(self, readout: MeterReadout) -> None:
        self.last_readout = readout
        self.stream.write(self.formatter.format_line(readout) + "\n")
        self.stream.flush()
