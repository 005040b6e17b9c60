"""Position source adapters."""

from taxi_meter.adapters.positioning.scripted_position_source import ScriptedPositionSource
from taxi_meter.adapters.positioning.track_position_source import TrackPositionSource
from taxi_meter.adapters.positioning.unavailable_position_source import (
    UnavailablePositionSource,
)

__all__ = [
    "ScriptedPositionSource",
    "TrackPositionSource",
    "UnavailablePositionSource",
]
