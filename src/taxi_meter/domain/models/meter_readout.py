"""Meter readout domain model."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class MeterReadout:
    """Everything a display needs to render the meter."""

    hired: bool
    main_fare: Decimal
    extras_fare: Decimal
    elapsed_seconds: int
    distance_km: float
    positioning_error: str | None
    has_fix: bool

    @property
    def total_fare(self) -> Decimal:
        """Metered fare plus manually entered extras."""
        return self.main_fare + self.extras_fare
