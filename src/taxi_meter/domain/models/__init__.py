"""Domain models for the taxi meter."""

from taxi_meter.domain.models.coordinate import Coordinate
from taxi_meter.domain.models.fare_schedule import URBAN_TAXI_FARES, FareSchedule
from taxi_meter.domain.models.fare_session_state import FareSessionState
from taxi_meter.domain.models.meter_readout import MeterReadout
from taxi_meter.domain.models.position_options import PositionOptions

__all__ = [
    "URBAN_TAXI_FARES",
    "Coordinate",
    "FareSchedule",
    "FareSessionState",
    "MeterReadout",
    "PositionOptions",
]
