"""Fare session state domain model."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from taxi_meter.domain.models.coordinate import Coordinate


@dataclass(frozen=True)
class FareSessionState:
    """Complete state of the meter at one instant.

    Values are replaced wholesale by the transition functions; nothing mutates a
    state in place.
    """

    hired: bool = False
    start_timestamp: datetime | None = None
    elapsed_seconds: int = 0
    traveled_distance_km: float = 0.0
    main_fare: Decimal = Decimal("0")
    extras_fare: Decimal = Decimal("0")
    start_coordinate: Coordinate | None = None
    last_coordinate: Coordinate | None = None
    positioning_error: str | None = None
