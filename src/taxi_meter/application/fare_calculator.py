"""Tiered fare calculation."""

import math
from decimal import ROUND_CEILING, ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from taxi_meter.domain.models import URBAN_TAXI_FARES, FareSchedule

_ONE_DECIMAL = Decimal("0.1")


def parse_non_negative(value: Any) -> Decimal | None:
    """Parse a finite, non-negative number as a Decimal; anything else gives None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        # repr keeps the shortest decimal form, so 2.2 stays 2.2 and not 2.2000000000000002
        value = repr(value)
    try:
        number = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    if not number.is_finite() or number < 0:
        return None
    return number


def _sanitize(value: Any) -> Decimal:
    number = parse_non_negative(value)
    return number if number is not None else Decimal("0")


def _increments(amount: Decimal, unit: Decimal) -> int:
    """Number of started units in ``amount``; a partial unit counts as a whole one."""
    if amount <= 0:
        return 0
    return int((amount / unit).to_integral_value(rounding=ROUND_CEILING))


def _charge_increments(fare: Decimal, count: int, schedule: FareSchedule) -> Decimal:
    for _ in range(count):
        if fare < schedule.tier1_fare_threshold:
            fare += schedule.tier1_increment_charge
        else:
            fare += schedule.tier2_increment_charge
    return fare


def compute_main_fare(
    distance_km: Any,
    waiting_minutes: Any,
    schedule: FareSchedule = URBAN_TAXI_FARES,
) -> Decimal:
    """Compute the metered fare (without extras) for a trip.

    Distance increments are charged first, then waiting increments, one at a time.
    Each increment picks its tier from the running total left by the previous one,
    so a single call can cross the threshold part-way. Invalid or negative inputs
    count as zero and a meter that has not run yet reads zero.

    Args:
        distance_km: Distance travelled in kilometres.
        waiting_minutes: Elapsed waiting time in minutes.
        schedule: Tariff table, the urban tariff by default.

    Returns:
        The fare rounded half-up to one decimal place.
    """
    distance = _sanitize(distance_km)
    waiting = _sanitize(waiting_minutes)

    if distance <= 0 and waiting <= 0:
        return Decimal("0.0")

    billable_distance_m = max(Decimal("0"), distance - schedule.flag_fall_distance_km) * 1000
    distance_increments = _increments(billable_distance_m, schedule.incremental_distance_unit_m)
    waiting_increments = _increments(waiting, schedule.incremental_waiting_unit_min)

    fare = schedule.flag_fall_charge
    fare = _charge_increments(fare, distance_increments, schedule)
    fare = _charge_increments(fare, waiting_increments, schedule)
    return fare.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP)
