#!/usr/bin/env python3
"""Helper script to generate a synthetic track file for `taxi-meter replay`."""

import json
import math
import sys
from datetime import UTC, datetime, timedelta

EARTH_RADIUS_KM = 6371.0


def _sample(latitude: float, longitude: float, at: datetime) -> dict:
    """Build one track sample."""
    return {
        "latitude": round(latitude, 6),
        "longitude": round(longitude, 6),
        "timestamp": at.isoformat(),
    }


def generate_track(
    latitude: float,
    longitude: float,
    distance_km: float,
    speed_kmh: float,
    wait_minutes: float = 0.0,
    interval_seconds: int = 5,
) -> list[dict]:
    """Drive due north at a constant speed, then wait in place."""
    start = datetime.now(UTC).replace(microsecond=0)
    degrees_per_km = math.degrees(1 / EARTH_RADIUS_KM)
    drive_seconds = int(distance_km / speed_kmh * 3600)

    samples = []
    for second in range(0, drive_seconds + 1, interval_seconds):
        travelled = speed_kmh * second / 3600
        at = start + timedelta(seconds=second)
        samples.append(_sample(latitude + travelled * degrees_per_km, longitude, at))

    end_latitude = latitude + distance_km * degrees_per_km
    if wait_minutes > 0:
        samples.append(
            _sample(
                end_latitude,
                longitude,
                start + timedelta(seconds=drive_seconds + wait_minutes * 60),
            )
        )
    return samples


if __name__ == "__main__":
    if len(sys.argv) < 5:
        print("Usage: python generate_track.py <lat> <lon> <km> <speed_kmh> [wait_minutes]")
        print("Example: python generate_track.py 22.3 114.17 5 30 2 > trip.json")
        sys.exit(1)

    track = generate_track(
        float(sys.argv[1]),
        float(sys.argv[2]),
        float(sys.argv[3]),
        float(sys.argv[4]),
        float(sys.argv[5]) if len(sys.argv) > 5 else 0.0,
    )
    print(json.dumps(track, indent=2))
