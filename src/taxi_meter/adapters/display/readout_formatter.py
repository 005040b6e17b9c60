"""Formatter for meter readouts."""

from decimal import ROUND_HALF_UP, Decimal

from taxi_meter.adapters.config.app_config import AppConfig
from taxi_meter.domain.models import MeterReadout


class ReadoutFormatter:
    """Formats readout values the way the meter face shows them."""

    def __init__(self, config: AppConfig) -> None:
        """Initialize the formatter.

        Args:
            config: Application configuration with the currency label.
        """
        self.config = config

    def format_amount(self, amount: Decimal) -> str:
        """Format an amount with one decimal place and the currency label (e.g. 'HK$ 31.1')."""
        value = amount.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
        return f"{self.config.currency_label} {value}"

    def format_elapsed(self, elapsed_seconds: int) -> str:
        """Format elapsed time as H:MM:SS."""
        hours, remainder = divmod(max(elapsed_seconds, 0), 3600)
        minutes, seconds = divmod(remainder, 60)
        return f"{hours}:{minutes:02d}:{seconds:02d}"

    def format_hire_status(self, readout: MeterReadout) -> str:
        return "HIRED" if readout.hired else "FOR HIRE"

    def format_gps_status(self, readout: MeterReadout) -> str | None:
        """Describe positioning while hired; None when there is nothing to report."""
        if not readout.hired:
            return None
        if readout.positioning_error:
            return f"GPS: {readout.positioning_error} (Using simulation)"
        if readout.has_fix:
            return f"GPS: Active • Distance: {readout.distance_km:.3f}km"
        return None

    def format_line(self, readout: MeterReadout) -> str:
        """Single-line rendering of the whole meter face."""
        parts = [
            f"{self.format_hire_status(readout):<8}",
            f"FARE {self.format_amount(readout.main_fare)}",
            f"EXTRAS {self.format_amount(readout.extras_fare)}",
            f"TIME {self.format_elapsed(readout.elapsed_seconds)}",
            f"DIST {readout.distance_km:.3f}km",
        ]
        gps_status = self.format_gps_status(readout)
        if gps_status:
            parts.append(gps_status)
        return " | ".join(parts)
