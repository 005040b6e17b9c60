"""Tests for the position source adapters."""

import asyncio
from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

import pytest

from taxi_meter.adapters.positioning import (
    ScriptedPositionSource,
    TrackPositionSource,
    UnavailablePositionSource,
)
from taxi_meter.adapters.positioning.track_position_source import (
    TIMEOUT_MESSAGE,
    UNAVAILABLE_MESSAGE,
)
from taxi_meter.domain.models import Coordinate, PositionOptions

START = datetime(2024, 7, 14, 9, 0, tzinfo=UTC)
OPTIONS = PositionOptions(high_accuracy=True, timeout_ms=5_000, max_cache_age_ms=1_000)


def _track(*offsets_seconds: float) -> list[Coordinate]:
    return [
        Coordinate(
            latitude=22.3 + index * 0.001,
            longitude=114.17,
            timestamp=START + timedelta(seconds=offset),
        )
        for index, offset in enumerate(offsets_seconds)
    ]


class TestScriptedPositionSource:
    """Tests for the synchronous scripted source."""

    def test_one_shot_waits_for_first_fix(self) -> None:
        """Given no fix yet, when requesting, then the callback runs on the next emitted fix."""
        source = ScriptedPositionSource()
        on_success = MagicMock()
        source.get_current_position(on_success, MagicMock(), OPTIONS)
        on_success.assert_not_called()

        fix = _track(0)[0]
        source.emit_fix(fix)

        on_success.assert_called_once_with(fix)

    def test_one_shot_answers_immediately_with_known_fix(self) -> None:
        """Given a known fix, when requesting, then the callback runs immediately."""
        source = ScriptedPositionSource()
        fix = _track(0)[0]
        source.emit_fix(fix)
        on_success = MagicMock()

        source.get_current_position(on_success, MagicMock(), OPTIONS)

        on_success.assert_called_once_with(fix)

    def test_cleared_watch_gets_nothing(self) -> None:
        """Given a cleared watch, when fixes are emitted, then it is not called."""
        source = ScriptedPositionSource()
        on_update = MagicMock()
        handle = source.watch_position(on_update, MagicMock(), OPTIONS)

        source.clear_watch(handle)
        source.clear_watch(handle)
        source.emit_fix(_track(0)[0])

        on_update.assert_not_called()


class TestTrackPositionSource:
    """Tests for the asyncio track replay."""

    def test_rejects_non_positive_speed(self) -> None:
        """Given a zero speed, when constructing, then ValueError is raised."""
        with pytest.raises(ValueError, match="speed must be greater than zero"):
            TrackPositionSource(_track(0), speed=0)

    def test_duration_is_scaled_by_speed(self) -> None:
        """Given a 60 s track at double speed, when asking its duration, then 30 s is returned."""
        assert TrackPositionSource(_track(0, 60), speed=2).duration_seconds == 30

    @pytest.mark.asyncio
    async def test_one_shot_delivers_first_sample_asynchronously(self) -> None:
        """Given a track, when requesting a fix, then the first sample arrives next loop turn."""
        track = _track(0, 1)
        source = TrackPositionSource(track)
        on_success = MagicMock()

        source.get_current_position(on_success, MagicMock(), OPTIONS)
        on_success.assert_not_called()
        await asyncio.sleep(0)

        on_success.assert_called_once_with(track[0])

    @pytest.mark.asyncio
    async def test_empty_track_reports_unavailable(self) -> None:
        """Given an empty track, when requesting a fix, then an error is reported."""
        source = TrackPositionSource([])
        on_error = MagicMock()

        source.get_current_position(MagicMock(), on_error, OPTIONS)
        await asyncio.sleep(0)

        on_error.assert_called_once_with(UNAVAILABLE_MESSAGE)

    @pytest.mark.asyncio
    async def test_watch_replays_all_samples_in_order(self) -> None:
        """Given a fast replay, when watching, then every sample is delivered in order."""
        track = _track(0, 1, 2, 3)
        source = TrackPositionSource(track, speed=100)
        updates: list[Coordinate] = []

        source.watch_position(updates.append, MagicMock(), OPTIONS)
        await source.wait_until_replayed()

        assert updates == track

    @pytest.mark.asyncio
    async def test_long_gap_reports_timeouts(self) -> None:
        """Given a gap longer than the watch timeout, when replaying, then timeouts are reported."""
        track = _track(0, 2.5)
        source = TrackPositionSource(track, speed=100)
        errors: list[str] = []
        short_timeout = PositionOptions(timeout_ms=10)

        source.watch_position(MagicMock(), errors.append, short_timeout)
        await source.wait_until_replayed()

        # 25 ms gap with a 10 ms timeout
        assert errors == [TIMEOUT_MESSAGE, TIMEOUT_MESSAGE]

    @pytest.mark.asyncio
    async def test_clear_watch_cancels_replay(self) -> None:
        """Given a slow replay, when the watch is cleared, then no more samples are delivered."""
        source = TrackPositionSource(_track(0, 10), speed=1)
        updates: list[Coordinate] = []
        handle = source.watch_position(
            updates.append, MagicMock(), PositionOptions(timeout_ms=60_000)
        )
        await asyncio.sleep(0.01)

        source.clear_watch(handle)
        await asyncio.sleep(0.01)

        assert len(updates) == 1


class TestUnavailablePositionSource:
    """Tests for the always-failing source."""

    @pytest.mark.asyncio
    async def test_one_shot_fails(self) -> None:
        """Given no positioning, when requesting a fix, then the error callback runs."""
        source = UnavailablePositionSource("User denied Geolocation")
        on_error = MagicMock()

        source.get_current_position(MagicMock(), on_error, OPTIONS)
        await asyncio.sleep(0)

        on_error.assert_called_once_with("User denied Geolocation")

    @pytest.mark.asyncio
    async def test_watch_fails_once_per_timeout(self) -> None:
        """Given a short timeout, when watching, then failures repeat until cleared."""
        source = UnavailablePositionSource()
        errors: list[str] = []

        handle = source.watch_position(MagicMock(), errors.append, PositionOptions(timeout_ms=10))
        await asyncio.sleep(0.055)
        source.clear_watch(handle)
        count = len(errors)
        await asyncio.sleep(0.03)

        assert count >= 3
        assert len(errors) == count
