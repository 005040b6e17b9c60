"""Fare schedule domain model."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class FareSchedule:
    """Fixed tariff table used to price a metered trip.

    The flag-fall charge covers the first ``flag_fall_distance_km``. After that every
    started distance unit and every started waiting unit adds one increment, charged
    at ``tier1_increment_charge`` while the running fare is below
    ``tier1_fare_threshold`` and at ``tier2_increment_charge`` once it reaches it.
    """

    label: str
    flag_fall_charge: Decimal
    flag_fall_distance_km: Decimal
    incremental_distance_unit_m: Decimal
    incremental_waiting_unit_min: Decimal
    tier1_increment_charge: Decimal
    tier2_increment_charge: Decimal
    tier1_fare_threshold: Decimal


URBAN_TAXI_FARES = FareSchedule(
    label="Urban Taxi Fares (July 2024)",
    flag_fall_charge=Decimal("29"),
    flag_fall_distance_km=Decimal("2"),
    incremental_distance_unit_m=Decimal("200"),
    incremental_waiting_unit_min=Decimal("1"),
    tier1_increment_charge=Decimal("2.1"),
    tier2_increment_charge=Decimal("1.4"),
    tier1_fare_threshold=Decimal("102.5"),
)
