"""Tests for the tiered fare calculation."""

from decimal import Decimal

import pytest

from taxi_meter.application.fare_calculator import compute_main_fare, parse_non_negative
from taxi_meter.domain.models import URBAN_TAXI_FARES


def test_meter_that_has_not_run_reads_zero() -> None:
    """Given no distance and no waiting time, when pricing, then the fare is zero."""
    assert compute_main_fare(0, 0) == Decimal("0")


def test_distance_within_flag_fall_costs_flag_fall() -> None:
    """Given 2 km, when pricing, then only the flag-fall charge applies."""
    assert compute_main_fare(2, 0) == Decimal("29.0")


def test_small_distance_still_drops_the_flag() -> None:
    """Given a few metres, when pricing, then the flag-fall charge applies."""
    assert compute_main_fare(0.01, 0) == Decimal("29.0")


def test_one_distance_increment_at_tier_one() -> None:
    """Given 2.2 km, when pricing, then one 200 m increment is added at the tier 1 rate."""
    assert compute_main_fare(2.2, 0) == Decimal("31.1")


def test_partial_distance_increment_rounds_up() -> None:
    """Given 2.01 km, when pricing, then the started 200 m segment is charged in full."""
    assert compute_main_fare(2.01, 0) == Decimal("31.1")


def test_thirty_five_increments_reach_threshold_exactly() -> None:
    """Given 9 km (35 increments), when pricing, then the fare sits exactly on the threshold."""
    assert compute_main_fare(9, 0) == Decimal("102.5")


def test_increment_after_threshold_bills_tier_two() -> None:
    """Given 9.2 km (36 increments), when pricing, then the 36th increment costs 1.4."""
    assert compute_main_fare(9.2, 0) == Decimal("103.9")


def test_distance_fare_slope_changes_at_threshold() -> None:
    """Given distances by increment count, when pricing, then slope is 2.1 then 1.4."""
    fares = [compute_main_fare(Decimal(2) + n * Decimal("0.2"), 0) for n in range(60)]

    for n in range(1, 60):
        step = fares[n] - fares[n - 1]
        expected = Decimal("2.1") if n <= 35 else Decimal("1.4")
        assert step == expected, f"increment {n}"


def test_waiting_increments_round_up() -> None:
    """Given one second of waiting, when pricing, then a whole minute is charged."""
    assert compute_main_fare(0, 1 / 60) == Decimal("31.1")
    assert compute_main_fare(0, 1) == Decimal("31.1")
    assert compute_main_fare(0, 61 / 60) == Decimal("33.2")


def test_waiting_increments_are_priced_after_distance() -> None:
    """Given distance past the threshold plus waiting, when pricing, waiting bills at tier 2."""
    # 36 distance increments leave the fare above the threshold
    assert compute_main_fare(9.2, 2) == Decimal("106.7")


def test_waiting_can_cross_the_threshold_part_way() -> None:
    """Given 34 distance increments and 3 waiting minutes, then tiers switch mid-call."""
    # 29 + 34 * 2.1 = 100.4 -> +2.1 = 102.5 -> +1.4 -> +1.4
    assert compute_main_fare(8.8, 3) == Decimal("105.3")


@pytest.mark.parametrize(
    "distance_km",
    [None, "abc", float("nan"), float("inf"), -5, True, [1]],
)
def test_invalid_distance_counts_as_zero(distance_km: object) -> None:
    """Given an unusable distance, when pricing, then it is treated as zero without raising."""
    assert compute_main_fare(distance_km, 0) == Decimal("0")
    assert compute_main_fare(distance_km, 1) == Decimal("31.1")


def test_numeric_strings_are_accepted() -> None:
    """Given numeric strings, when pricing, then they are parsed."""
    assert compute_main_fare("2.2", "0") == Decimal("31.1")


def test_result_is_stable_under_re_rounding() -> None:
    """Given any inputs, when re-rounding the result to one decimal, then it is unchanged."""
    for distance in (0, 1.37, 2.2, 7.77, 15.05, 42.0):
        for minutes in (0, 0.5, 3.2, 17):
            fare = compute_main_fare(distance, minutes)
            assert fare == fare.quantize(Decimal("0.1"))
            assert round(float(fare), 1) == float(fare)


def test_default_schedule_is_urban_tariff() -> None:
    """Given the urban tariff, when inspecting it, then it matches the published table."""
    assert URBAN_TAXI_FARES.flag_fall_charge == Decimal("29")
    assert URBAN_TAXI_FARES.flag_fall_distance_km == Decimal("2")
    assert URBAN_TAXI_FARES.incremental_distance_unit_m == Decimal("200")
    assert URBAN_TAXI_FARES.tier1_increment_charge == Decimal("2.1")
    assert URBAN_TAXI_FARES.tier2_increment_charge == Decimal("1.4")
    assert URBAN_TAXI_FARES.tier1_fare_threshold == Decimal("102.5")


def test_schedule_cannot_be_mutated() -> None:
    """Given the tariff constant, when assigning to it, then it refuses."""
    with pytest.raises(AttributeError):
        URBAN_TAXI_FARES.flag_fall_charge = Decimal("1")  # type: ignore[misc]


def test_parse_non_negative() -> None:
    """Given assorted values, when parsing, then only finite non-negative numbers survive."""
    assert parse_non_negative(10) == Decimal("10")
    assert parse_non_negative(0.1) == Decimal("0.1")
    assert parse_non_negative(Decimal("2.5")) == Decimal("2.5")
    assert parse_non_negative(" 3 ") == Decimal("3")
    assert parse_non_negative(-1) is None
    assert parse_non_negative(float("inf")) is None
    assert parse_non_negative("NaN") is None
    assert parse_non_negative(False) is None
