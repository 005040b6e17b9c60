"""Application layer - fare calculation and the fare session state machine."""

from taxi_meter.application.distance_accumulator import DistanceAccumulator
from taxi_meter.application.fare_calculator import compute_main_fare
from taxi_meter.application.fare_session import FareSession
from taxi_meter.application.geo import haversine_km

__all__ = [
    "DistanceAccumulator",
    "FareSession",
    "compute_main_fare",
    "haversine_km",
]
