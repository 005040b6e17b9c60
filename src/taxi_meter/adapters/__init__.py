"""Adapters layer - configuration, positioning, timers and displays."""

from taxi_meter.adapters.config import AppConfig
from taxi_meter.adapters.display import ConsoleDisplay, ReadoutFormatter
from taxi_meter.adapters.positioning import (
    ScriptedPositionSource,
    TrackPositionSource,
    UnavailablePositionSource,
)
from taxi_meter.adapters.timers import AsyncioTicker, ManualTicker
from taxi_meter.adapters.tracks import TrackLoader

__all__ = [
    "AppConfig",
    "AsyncioTicker",
    "ConsoleDisplay",
    "ManualTicker",
    "ReadoutFormatter",
    "ScriptedPositionSource",
    "TrackLoader",
    "TrackPositionSource",
    "UnavailablePositionSource",
]
