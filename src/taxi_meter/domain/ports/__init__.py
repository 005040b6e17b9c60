"""Ports (interfaces) for the ports-and-adapters architecture."""

from taxi_meter.domain.ports.position_source import (
    PositionCallback,
    PositionErrorCallback,
    PositionSource,
)

__all__ = [
    "PositionCallback",
    "PositionErrorCallback",
    "PositionSource",
]
