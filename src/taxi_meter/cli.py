"""Command line tools for the taxi meter."""

import argparse
import json
import logging
import math
import sys
from collections import deque
from typing import Any

from pydantic import ValidationError

from taxi_meter.adapters.config import AppConfig
from taxi_meter.adapters.display import ConsoleDisplay, ReadoutFormatter
from taxi_meter.adapters.positioning import ScriptedPositionSource
from taxi_meter.adapters.timers import ManualTicker
from taxi_meter.adapters.tracks import TrackLoader
from taxi_meter.application import FareSession, compute_main_fare
from taxi_meter.domain.contracts import ReadoutPublisherProtocol
from taxi_meter.domain.models import Coordinate, MeterReadout

logger = logging.getLogger(__name__)


def readout_to_dict(readout: MeterReadout) -> dict[str, Any]:
    """Convert a readout into JSON-friendly values."""
    return {
        "hired": readout.hired,
        "main_fare": str(readout.main_fare),
        "extras_fare": str(readout.extras_fare),
        "total_fare": str(readout.total_fare),
        "elapsed_seconds": readout.elapsed_seconds,
        "distance_km": round(readout.distance_km, 3),
        "positioning_error": readout.positioning_error,
        "has_fix": readout.has_fix,
    }


def replay_track(
    track: list[Coordinate],
    config: AppConfig,
    publishers: list[ReadoutPublisherProtocol] | None = None,
) -> MeterReadout:
    """Run a whole hired trip over a recorded track without waiting in real time.

    The meter ticks once per second of track time; each sample is delivered as soon
    as the meter clock reaches its offset from the first sample.

    Raises:
        ValueError: If the track has no samples.
    """
    if not track:
        raise ValueError("Track is empty")

    position_source = ScriptedPositionSource()
    ticker = ManualTicker()
    session = FareSession(
        position_source,
        ticker,
        publishers=publishers,
        fallback_step_km=config.fallback_step_km,
        initial_options=config.initial_position_options(),
        watch_options=config.watch_position_options(),
    )

    origin = track[0].timestamp
    pending = deque(track)

    def deliver_until(second: int) -> None:
        while pending and (pending[0].timestamp - origin).total_seconds() <= second:
            position_source.emit_fix(pending.popleft())

    session.start_hire()
    deliver_until(0)
    total_seconds = math.ceil((track[-1].timestamp - origin).total_seconds())
    for second in range(1, total_seconds + 1):
        ticker.advance(1)
        deliver_until(second)
    session.stop_hire()
    return session.readout


def _print_fare(distance_km: float, waiting_minutes: float, as_json: bool) -> None:
    fare = compute_main_fare(distance_km, waiting_minutes)
    if as_json:
        print(
            json.dumps(
                {
                    "distance_km": distance_km,
                    "waiting_minutes": waiting_minutes,
                    "fare": str(fare),
                },
                indent=2,
            )
        )
    else:
        print(f"{fare}")


def _replay(path: str, config: AppConfig, as_json: bool, show_steps: bool) -> None:
    formatter = ReadoutFormatter(config)
    publishers: list[ReadoutPublisherProtocol] = [ConsoleDisplay(formatter)] if show_steps else []
    readout = replay_track(TrackLoader.load(path), config, publishers)
    if as_json:
        print(json.dumps(readout_to_dict(readout), indent=2))
    else:
        print(formatter.format_line(readout))
        print(f"TOTAL {formatter.format_amount(readout.total_fare)}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Taxi fare meter tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Price a 5.3 km trip with 3 minutes of waiting
  taxi-meter fare 5.3 3

  # Replay a recorded trip and print the final meter readout
  taxi-meter replay trip.json --json
        """,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    fare_parser = subparsers.add_parser("fare", help="Compute the metered fare")
    fare_parser.add_argument("distance_km", type=float, help="Distance travelled in km")
    fare_parser.add_argument(
        "waiting_minutes", type=float, nargs="?", default=0.0, help="Waiting time in minutes"
    )
    fare_parser.add_argument("--json", action="store_true", help="Output as JSON")

    replay_parser = subparsers.add_parser("replay", help="Replay a recorded track")
    replay_parser.add_argument("track", help="Path to a JSON track file")
    replay_parser.add_argument("--json", action="store_true", help="Output as JSON")
    replay_parser.add_argument(
        "--show-steps", action="store_true", help="Print every readout during the replay"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the CLI and return the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        config = AppConfig()
    except ValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=config.logging_level(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )

    if args.command == "fare":
        _print_fare(args.distance_km, args.waiting_minutes, args.json)
        return 0

    if args.command == "replay":
        try:
            _replay(args.track, config, args.json, args.show_steps)
        except (FileNotFoundError, ValueError) as e:
            logger.error(f"Cannot replay {args.track}: {e}", exc_info=True)
            return 1
        return 0

    parser.print_help()
    return 1


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()

