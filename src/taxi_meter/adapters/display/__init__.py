"""Display adapters."""

from taxi_meter.adapters.display.console_display import ConsoleDisplay
from taxi_meter.adapters.display.readout_formatter import ReadoutFormatter

__all__ = ["ConsoleDisplay", "ReadoutFormatter"]
