"""Main entry point for running the meter live."""

import asyncio
import logging
import sys

from taxi_meter.adapters.config import AppConfig
from taxi_meter.adapters.display import ConsoleDisplay, ReadoutFormatter
from taxi_meter.adapters.positioning import TrackPositionSource, UnavailablePositionSource
from taxi_meter.adapters.timers import AsyncioTicker
from taxi_meter.adapters.tracks import TrackLoader
from taxi_meter.application import FareSession
from taxi_meter.domain.ports import PositionSource

logger = logging.getLogger(__name__)


def build_session(config: AppConfig, position_source: PositionSource | None) -> FareSession:
    """Wire a fare session with an asyncio ticker and a console display."""
    display = ConsoleDisplay(ReadoutFormatter(config))
    return FareSession(
        position_source,
        AsyncioTicker(config.tick_interval_seconds),
        publishers=[display],
        fallback_step_km=config.fallback_step_km,
        initial_options=config.initial_position_options(),
        watch_options=config.watch_position_options(),
    )


async def run_meter(config: AppConfig) -> None:
    """Run one hired trip until the track ends or the task is cancelled."""
    track_source: TrackPositionSource | None = None
    position_source: PositionSource
    if config.track_file:
        track_source = TrackPositionSource(
            TrackLoader.load(config.track_file), speed=config.replay_speed
        )
        position_source = track_source
    else:
        logger.info("No track configured, running on the synthetic distance fallback")
        position_source = UnavailablePositionSource()

    session = build_session(config, position_source)
    session.start_hire()
    try:
        if track_source is not None:
            await track_source.wait_until_replayed()
            # One more tick so the last sample is priced with an up-to-date clock
            await asyncio.sleep(config.tick_interval_seconds)
        else:
            await asyncio.Event().wait()
    finally:
        if session.is_hired:
            session.stop_hire()
        readout = session.readout
        logger.info(
            f"Final fare {readout.main_fare} + extras {readout.extras_fare} "
            f"= {readout.total_fare}"
        )


async def main() -> None:
    """Main application entry point."""
    config = AppConfig()

    logging.basicConfig(
        level=config.logging_level(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )

    try:
        await run_meter(config)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Cannot start meter: {e}")
        sys.exit(1)


def run() -> None:
    """Console script entry point."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Shutting down...")


if __name__ == "__main__":
    run()
