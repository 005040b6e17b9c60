"""Fare session state machine."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from taxi_meter.application import transitions
from taxi_meter.application.distance_accumulator import (
    INITIAL_FIX_OPTIONS,
    WATCH_OPTIONS,
    DistanceAccumulator,
)
from taxi_meter.domain.models import (
    URBAN_TAXI_FARES,
    Coordinate,
    FareSchedule,
    FareSessionState,
    MeterReadout,
    PositionOptions,
)

if TYPE_CHECKING:
    from taxi_meter.domain.contracts import ReadoutPublisherProtocol, TickerProtocol
    from taxi_meter.domain.ports import PositionSource

logger = logging.getLogger(__name__)

Transition = Callable[[FareSessionState], FareSessionState]


@dataclass(frozen=True)
class _QueuedEvent:
    generation: int
    name: str
    transition: Transition


def _utc_now() -> datetime:
    return datetime.now(UTC)


class FareSession:
    """Owns the meter state and wires timer and position events into it.

    The session is either idle or hired. Ticks and position events are queued
    with the generation they were registered under and applied in arrival order;
    every start, stop or reset bumps the generation, so callbacks that belong to
    an earlier trip are dropped instead of touching the new state.
    """

    def __init__(
        self,
        position_source: PositionSource | None,
        ticker: TickerProtocol,
        publishers: list[ReadoutPublisherProtocol] | None = None,
        schedule: FareSchedule = URBAN_TAXI_FARES,
        fallback_step_km: float = transitions.DEFAULT_FALLBACK_STEP_KM,
        initial_options: PositionOptions = INITIAL_FIX_OPTIONS,
        watch_options: PositionOptions = WATCH_OPTIONS,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """Initialize an idle session.

        Args:
            position_source: Positioning capability, or None when the device has none.
            ticker: Periodic timer that drives elapsed time while hired.
            publishers: Consumers notified with a readout after every change.
            schedule: Tariff table.
            fallback_step_km: Distance added per positioning failure while hired.
            initial_options: Options for the one-shot origin fix.
            watch_options: Options for the continuous position watch.
            clock: Source of the trip start timestamp.
        """
        self.position_source = position_source
        self.ticker = ticker
        self.publishers: list[ReadoutPublisherProtocol] = list(publishers or [])
        self.schedule = schedule
        self.fallback_step_km = fallback_step_km
        self.initial_options = initial_options
        self.watch_options = watch_options
        self._clock = clock
        self._state = transitions.initial_state()
        self._generation = 0
        self._accumulator: DistanceAccumulator | None = None
        self._queue: deque[_QueuedEvent] = deque()
        self._draining = False

    @property
    def state(self) -> FareSessionState:
        """Current state value."""
        return self._state

    @property
    def readout(self) -> MeterReadout:
        """Current observable outputs."""
        return transitions.to_readout(self._state)

    @property
    def generation(self) -> int:
        """Counter bumped on every start, stop and reset."""
        return self._generation

    @property
    def is_hired(self) -> bool:
        return self._state.hired

    def subscribe(self, publisher: ReadoutPublisherProtocol) -> None:
        """Register a consumer for readouts and send it the current one."""
        self.publishers.append(publisher)
        self._publish_to(publisher, self.readout)

    # User intents

    def start_hire(self) -> None:
        """Drop the flag and start metering a new trip."""
        if self._state.hired:
            logger.warning("Meter already hired, ignoring start")
            return

        self._generation += 1
        generation = self._generation
        self._state = transitions.start_hire(self._state, self._clock(), self.schedule)
        logger.info(f"Hire started (session {generation}), fare {self._state.main_fare}")
        self._publish()

        self._accumulator = DistanceAccumulator(
            self.position_source,
            on_initial_fix=lambda coordinate: self._post(
                generation, "initial fix", self._initial_fix_transition(coordinate)
            ),
            on_update=lambda coordinate: self._post(
                generation, "position update", self._update_transition(coordinate)
            ),
            on_error=lambda message: self._post(
                generation, "position error", self._error_transition(message)
            ),
            initial_options=self.initial_options,
            watch_options=self.watch_options,
        )
        self.ticker.start(lambda: self._post(generation, "tick", self._tick_transition))
        self._accumulator.start()

    def stop_hire(self) -> None:
        """Stop metering; the final fare stays on display."""
        if not self._state.hired:
            logger.warning("Meter not hired, ignoring stop")
            return

        self._generation += 1
        self._teardown()
        self._state = transitions.stop_hire(self._state)
        logger.info(
            f"Hire stopped after {self._state.elapsed_seconds}s and "
            f"{self._state.traveled_distance_km:.3f}km, fare {self._state.main_fare}"
        )
        self._publish()

    def toggle_hire(self) -> None:
        """Start when idle, stop when hired."""
        if self._state.hired:
            self.stop_hire()
        else:
            self.start_hire()

    def add_extra(self, amount: Any) -> None:
        """Add a surcharge to the extras ledger."""
        new_state = transitions.add_extra(self._state, amount)
        if new_state is self._state:
            logger.warning(f"Ignoring invalid extra amount: {amount!r}")
            return
        self._state = new_state
        logger.info(f"Added extra {amount}, extras now {self._state.extras_fare}")
        self._publish()

    def reset_extras(self) -> None:
        """Clear the extras ledger."""
        self._state = transitions.reset_extras(self._state)
        logger.info("Extras reset")
        self._publish()

    def reset_all(self) -> None:
        """Hard reset to an idle, zeroed meter from any state."""
        self._generation += 1
        self._teardown()
        self._state = transitions.reset_all(self._state)
        logger.info("Meter reset")
        self._publish()

    # Event handling

    def _tick_transition(self, state: FareSessionState) -> FareSessionState:
        return transitions.tick(state, self.schedule)

    def _initial_fix_transition(self, coordinate: Coordinate) -> Transition:
        def transition(state: FareSessionState) -> FareSessionState:
            return transitions.apply_initial_fix(state, coordinate, self.schedule)

        return transition

    def _update_transition(self, coordinate: Coordinate) -> Transition:
        def transition(state: FareSessionState) -> FareSessionState:
            return transitions.apply_position_update(state, coordinate, self.schedule)

        return transition

    def _error_transition(self, message: str) -> Transition:
        def transition(state: FareSessionState) -> FareSessionState:
            logger.warning(f"Positioning error: {message}")
            return transitions.apply_position_error(
                state, message, self.fallback_step_km, self.schedule
            )

        return transition

    def _post(self, generation: int, name: str, transition: Transition) -> None:
        """Queue an event and, unless already draining, apply everything queued."""
        self._queue.append(_QueuedEvent(generation, name, transition))
        if self._draining:
            return

        self._draining = True
        try:
            while self._queue:
                event = self._queue.popleft()
                if event.generation != self._generation:
                    logger.debug(
                        f"Dropping stale {event.name} from session {event.generation} "
                        f"(current {self._generation})"
                    )
                    continue
                new_state = event.transition(self._state)
                if new_state != self._state:
                    self._state = new_state
                    self._publish()
        finally:
            self._draining = False

    def _teardown(self) -> None:
        """Unregister the timer and the position feed of the current trip."""
        if self._accumulator is not None:
            self._accumulator.stop()
            self._accumulator = None
        self.ticker.stop()
        self._queue.clear()

    def _publish(self) -> None:
        readout = self.readout
        for publisher in list(self.publishers):
            self._publish_to(publisher, readout)

    def _publish_to(self, publisher: ReadoutPublisherProtocol, readout: MeterReadout) -> None:
        try:
            publisher.publish(readout)
        except Exception as e:
            logger.error(f"Readout publisher {publisher!r} failed: {e}", exc_info=True)
