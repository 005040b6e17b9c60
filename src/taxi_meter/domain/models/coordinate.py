"""Coordinate domain model."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Coordinate:
    """A single position fix reported by a positioning source."""

    latitude: float  # degrees
    longitude: float  # degrees
    timestamp: datetime
