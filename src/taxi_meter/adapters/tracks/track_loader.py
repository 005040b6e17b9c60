"""Loader for recorded position tracks."""

import logging
from datetime import UTC, datetime
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from taxi_meter.domain.models import Coordinate

logger = logging.getLogger(__name__)


class TrackPoint(BaseModel):
    """One sample as stored in a track file."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    # ISO-8601 string or seconds since the Unix epoch
    timestamp: datetime

    def to_coordinate(self) -> Coordinate:
        timestamp = self.timestamp
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=UTC)
        return Coordinate(latitude=self.latitude, longitude=self.longitude, timestamp=timestamp)


_TRACK_ADAPTER = TypeAdapter(list[TrackPoint])


class TrackLoader:
    """Loads tracks from JSON files."""

    @staticmethod
    def parse(content: str | bytes) -> list[Coordinate]:
        """Parse a JSON array of ``{latitude, longitude, timestamp}`` objects.

        Raises:
            ValueError: If the content is not a valid track or samples go back in time.
        """
        try:
            points = _TRACK_ADAPTER.validate_json(content)
        except ValidationError as e:
            raise ValueError(f"Invalid track: {e.error_count()} error(s): {e}") from e

        coordinates = [point.to_coordinate() for point in points]
        for index, (earlier, later) in enumerate(zip(coordinates, coordinates[1:]), start=1):
            if later.timestamp < earlier.timestamp:
                raise ValueError(f"Track sample {index} is earlier than the sample before it")
        return coordinates

    @staticmethod
    def load(path: str | Path) -> list[Coordinate]:
        """Load a track file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the file is not a valid track.
        """
        track_path = Path(path)
        if not track_path.exists():
            raise FileNotFoundError(f"Track file not found: {track_path}")

        coordinates = TrackLoader.parse(track_path.read_bytes())
        logger.info(f"Loaded {len(coordinates)} track samples from {track_path}")
        return coordinates
