"""Domain layer - core business models and interfaces."""

from taxi_meter.domain.models import (
    URBAN_TAXI_FARES,
    Coordinate,
    FareSchedule,
    FareSessionState,
    MeterReadout,
    PositionOptions,
)
from taxi_meter.domain.ports import PositionSource

__all__ = [
    "URBAN_TAXI_FARES",
    "Coordinate",
    "FareSchedule",
    "FareSessionState",
    "MeterReadout",
    "PositionOptions",
    "PositionSource",
]
