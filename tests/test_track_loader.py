"""Tests for the track loader."""

import json
from datetime import UTC, datetime
from pathlib import Path

import pytest

from taxi_meter.adapters.tracks import TrackLoader


def test_parses_iso_timestamps() -> None:
    """Given ISO-8601 samples, when parsing, then coordinates with aware timestamps are returned."""
    content = json.dumps(
        [
            {"latitude": 22.3, "longitude": 114.17, "timestamp": "2024-07-14T09:00:00+08:00"},
            {"latitude": 22.309, "longitude": 114.17, "timestamp": "2024-07-14T09:02:00+08:00"},
        ]
    )

    track = TrackLoader.parse(content)

    assert len(track) == 2
    assert track[0].latitude == 22.3
    assert (track[1].timestamp - track[0].timestamp).total_seconds() == 120


def test_parses_numeric_timestamps_as_utc() -> None:
    """Given epoch-second timestamps, when parsing, then they become UTC datetimes."""
    content = json.dumps([{"latitude": 0, "longitude": 0, "timestamp": 60}])

    track = TrackLoader.parse(content)

    assert track[0].timestamp == datetime(1970, 1, 1, 0, 1, tzinfo=UTC)


def test_naive_timestamps_are_treated_as_utc() -> None:
    """Given a timestamp without offset, when parsing, then UTC is assumed."""
    content = json.dumps([{"latitude": 0, "longitude": 0, "timestamp": "2024-07-14T09:00:00"}])

    track = TrackLoader.parse(content)

    assert track[0].timestamp.tzinfo is not None


@pytest.mark.parametrize(
    "content",
    [
        "not json",
        json.dumps({"latitude": 0}),
        json.dumps([{"latitude": 91, "longitude": 0, "timestamp": 0}]),
        json.dumps([{"latitude": 0, "longitude": 181, "timestamp": 0}]),
        json.dumps([{"latitude": 0, "longitude": 0}]),
    ],
)
def test_rejects_malformed_tracks(content: str) -> None:
    """Given malformed content, when parsing, then ValueError is raised."""
    with pytest.raises(ValueError, match="Invalid track"):
        TrackLoader.parse(content)


def test_rejects_samples_going_back_in_time() -> None:
    """Given out-of-order samples, when parsing, then ValueError is raised."""
    content = json.dumps(
        [
            {"latitude": 0, "longitude": 0, "timestamp": 10},
            {"latitude": 0, "longitude": 0, "timestamp": 5},
        ]
    )

    with pytest.raises(ValueError, match="earlier than the sample before it"):
        TrackLoader.parse(content)


def test_load_reads_file(tmp_path: Path) -> None:
    """Given a track file, when loading, then its samples are returned."""
    path = tmp_path / "trip.json"
    path.write_text(json.dumps([{"latitude": 22.3, "longitude": 114.17, "timestamp": 0}]))

    assert len(TrackLoader.load(path)) == 1


def test_load_missing_file_raises() -> None:
    """Given a missing file, when loading, then FileNotFoundError is raised."""
    with pytest.raises(FileNotFoundError, match="Track file not found"):
        TrackLoader.load("nonexistent-track.json")
