"""Track file adapters."""

from taxi_meter.adapters.tracks.track_loader import TrackLoader, TrackPoint

__all__ = ["TrackLoader", "TrackPoint"]
