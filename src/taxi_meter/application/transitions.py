"""Pure state transitions for a fare session.

Every function takes a ``FareSessionState`` and returns a new one; none of them
touch timers, position sources or publishers. ``FareSession`` owns the side
effects and calls these in event order.
"""

from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from typing import Any

from taxi_meter.application.fare_calculator import compute_main_fare, parse_non_negative
from taxi_meter.application.geo import haversine_km
from taxi_meter.domain.models import (
    URBAN_TAXI_FARES,
    Coordinate,
    FareSchedule,
    FareSessionState,
    MeterReadout,
)

DEFAULT_FALLBACK_STEP_KM = 0.001


def initial_state() -> FareSessionState:
    """Idle meter with every counter at zero."""
    return FareSessionState()


def _recompute_fare(
    state: FareSessionState, schedule: FareSchedule = URBAN_TAXI_FARES
) -> FareSessionState:
    """Reprice the main fare from the latest distance and elapsed time."""
    if not state.hired:
        return state
    fare = compute_main_fare(
        state.traveled_distance_km, Decimal(state.elapsed_seconds) / 60, schedule
    )
    # The flag has already dropped; a meter that has not moved yet still shows flag-fall.
    return replace(state, main_fare=max(fare, schedule.flag_fall_charge))


def start_hire(
    state: FareSessionState, now: datetime, schedule: FareSchedule = URBAN_TAXI_FARES
) -> FareSessionState:
    """Drop the flag: begin a new hired trip, keeping any extras already entered."""
    return replace(
        state,
        hired=True,
        start_timestamp=now,
        elapsed_seconds=0,
        traveled_distance_km=0.0,
        main_fare=schedule.flag_fall_charge,
        start_coordinate=None,
        last_coordinate=None,
        positioning_error=None,
    )


def stop_hire(state: FareSessionState) -> FareSessionState:
    """End the trip; the fare stays on display."""
    return replace(state, hired=False)


def tick(state: FareSessionState, schedule: FareSchedule = URBAN_TAXI_FARES) -> FareSessionState:
    """Advance the meter clock by one second."""
    if not state.hired:
        return state
    return _recompute_fare(replace(state, elapsed_seconds=state.elapsed_seconds + 1), schedule)


def apply_initial_fix(
    state: FareSessionState, coordinate: Coordinate, schedule: FareSchedule = URBAN_TAXI_FARES
) -> FareSessionState:
    """Record the first fix of the trip as its origin.

    Once an origin exists, later one-shot results are handled like watch updates.
    """
    if not state.hired:
        return state
    if state.start_coordinate is not None:
        return apply_position_update(state, coordinate, schedule)
    return _recompute_fare(
        replace(
            state,
            start_coordinate=coordinate,
            last_coordinate=coordinate,
            traveled_distance_km=0.0,
            positioning_error=None,
        ),
        schedule,
    )


def apply_position_update(
    state: FareSessionState, coordinate: Coordinate, schedule: FareSchedule = URBAN_TAXI_FARES
) -> FareSessionState:
    """Set the distance to the straight-line displacement from the trip origin.

    Distance is not integrated along the path: driving out and back again brings it
    back towards zero.
    """
    if not state.hired:
        return state
    if state.start_coordinate is None:
        return apply_initial_fix(state, coordinate, schedule)
    return _recompute_fare(
        replace(
            state,
            last_coordinate=coordinate,
            traveled_distance_km=haversine_km(state.start_coordinate, coordinate),
            positioning_error=None,
        ),
        schedule,
    )


def apply_position_error(
    state: FareSessionState,
    message: str,
    fallback_step_km: float = DEFAULT_FALLBACK_STEP_KM,
    schedule: FareSchedule = URBAN_TAXI_FARES,
) -> FareSessionState:
    """Record a positioning failure, nudging the distance forward while hired."""
    state = replace(state, positioning_error=message)
    if not state.hired:
        return state
    return _recompute_fare(
        replace(state, traveled_distance_km=state.traveled_distance_km + fallback_step_km),
        schedule,
    )


def add_extra(state: FareSessionState, amount: Any) -> FareSessionState:
    """Add a surcharge to the extras ledger; unusable amounts leave the state untouched."""
    value = parse_non_negative(amount)
    if value is None:
        return state
    return replace(state, extras_fare=state.extras_fare + value)


def reset_extras(state: FareSessionState) -> FareSessionState:
    """Clear the extras ledger."""
    return replace(state, extras_fare=Decimal("0"))


def reset_all(state: FareSessionState) -> FareSessionState:  # noqa: ARG001
    """Hard reset to an idle, zeroed meter from any state."""
    return initial_state()


def to_readout(state: FareSessionState) -> MeterReadout:
    """Project a state onto what displays consume."""
    return MeterReadout(
        hired=state.hired,
        main_fare=state.main_fare,
        extras_fare=state.extras_fare,
        elapsed_seconds=state.elapsed_seconds,
        distance_km=state.traveled_distance_km,
        positioning_error=state.positioning_error,
        has_fix=state.last_coordinate is not None,
    )
