"""Race simulation engine."""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from derbysim.models import RaceConfig, RacerDescriptor
from derbysim.simulation.errors import (
    ClockError,
    RaceNotCompleteError,
    RaceSetupError,
    RaceStalledError,
    UnknownRacerError,
)
from derbysim.simulation.noise import ValueNoise

logger = logging.getLogger(__name__)

# Matches a 60 Hz display refresh
DEFAULT_FRAME_INTERVAL_MS = 1000 / 60


class RacerStatus(str, Enum):
    """Racer lifecycle status."""

    NOT_STARTED = "not_started"
    RUNNING = "running"
    FINISHED = "finished"


@dataclass
class RacerState:
    """Tracks a racer's state during the race."""

    racer_id: str
    noise: ValueNoise
    clock: float = 0.0
    distance: float = 0.0
    speed: float = 0.0
    speed_history: list[float] = field(default_factory=list)
    status: RacerStatus = RacerStatus.NOT_STARTED
    finish_time: float | None = None

    @property
    def finished(self) -> bool:
        return self.status == RacerStatus.FINISHED


@dataclass
class RaceState:
    """Complete race state, owned by a single RaceSimulator."""

    racers: dict[str, RacerState]
    elapsed_ms: float = 0.0
    ticks: int = 0

    @property
    def completed(self) -> bool:
        """True once every racer has finished."""
        return all(r.finished for r in self.racers.values())


@dataclass(frozen=True)
class ProgressSnapshot:
    """Read-only view of race progress at one instant."""

    elapsed_ms: float
    distance_percent: Mapping[str, float]
    speeds: Mapping[str, float]

    def standings(self) -> list[str]:
        """Racer ids ordered by progress, ties broken by id."""
        return sorted(self.distance_percent, key=lambda rid: (-self.distance_percent[rid], rid))


@dataclass(frozen=True)
class RaceResult:
    """Final race outcome."""

    finish_times: Mapping[str, float]
    speed_histories: Mapping[str, tuple[float, ...]]

    def rankings(self) -> list[str]:
        """Racer ids by finish time; simultaneous finishers ordered by id."""
        return sorted(self.finish_times, key=lambda rid: (self.finish_times[rid], rid))

    @property
    def winner(self) -> str:
        return self.rankings()[0]

    def gap_to_winner(self, racer_id: str) -> float:
        """Milliseconds behind the winner."""
        return self.finish_times[racer_id] - self.finish_times[self.winner]


class RaceSimulator:
    """Advances racers along a straight track with noise-driven speed.

    Each tick moves every unfinished racer once by a fixed physics step. The
    noise clock advances by a fixed increment per tick, so motion depends only
    on the number of ticks, never on how much wall time passed between them.
    Racers do not interact, so the order in which they are updated within a
    tick has no effect on the outcome.
    """

    def __init__(
        self,
        racers: Iterable[RacerDescriptor],
        config: RaceConfig | None = None,
    ):
        """Initialize the race with all racers at the start line.

        Args:
            racers: Racer descriptors; ids must be unique
            config: Race constants (defaults if None)

        Raises:
            RaceSetupError: Too few racers or duplicate ids
        """
        self.config = config if config is not None else RaceConfig()
        self.descriptors = list(racers)

        if len(self.descriptors) < self.config.min_racers:
            raise RaceSetupError(
                f"Race needs at least {self.config.min_racers} racer(s), got {len(self.descriptors)}"
            )

        states: dict[str, RacerState] = {}
        for descriptor in self.descriptors:
            if descriptor.id in states:
                raise RaceSetupError(f"Duplicate racer id {descriptor.id!r}")
            states[descriptor.id] = RacerState(
                racer_id=descriptor.id,
                noise=ValueNoise(descriptor.seed),
            )

        self._state = RaceState(racers=states)
        self._result: RaceResult | None = None

    @property
    def racer_ids(self) -> list[str]:
        return list(self._state.racers)

    @property
    def completed(self) -> bool:
        return self._result is not None

    @property
    def elapsed_ms(self) -> float:
        return self._state.elapsed_ms

    @property
    def ticks(self) -> int:
        return self._state.ticks

    def tick(self, elapsed_ms: float) -> bool:
        """Advance every unfinished racer by one fixed step.

        Args:
            elapsed_ms: Wall time since race start, recorded as the finish
                time of anyone crossing the line this tick

        Returns:
            True if the race is complete
        """
        if self.completed:
            return True

        self._advance_clock(elapsed_ms)
        for racer in self._state.racers.values():
            self._step(racer)

        self._check_completion()
        return self.completed

    def tick_racer(self, racer_id: str, elapsed_ms: float) -> RacerStatus:
        """Advance a single racer by one fixed step.

        Args:
            racer_id: Racer to advance
            elapsed_ms: Wall time since race start

        Returns:
            The racer's status after the step

        Raises:
            UnknownRacerError: racer_id is not in this race
        """
        racer = self._state.racers.get(racer_id)
        if racer is None:
            raise UnknownRacerError(racer_id)
        if self.completed:
            return racer.status

        self._advance_clock(elapsed_ms)
        self._step(racer)
        self._check_completion()
        return racer.status

    def _advance_clock(self, elapsed_ms: float) -> None:
        if elapsed_ms < self._state.elapsed_ms:
            raise ClockError(
                f"Elapsed time went backwards: {elapsed_ms} < {self._state.elapsed_ms}"
            )
        self._state.elapsed_ms = elapsed_ms
        self._state.ticks += 1

    def _step(self, racer: RacerState) -> None:
        """Apply the update rule to one racer."""
        if racer.finished:
            return

        cfg = self.config
        racer.status = RacerStatus.RUNNING

        # Synthetic clock, independent of frame timing
        racer.clock += cfg.clock_step

        target_speed = racer.noise.sample(racer.clock) * cfg.max_speed
        speed = racer.speed + (target_speed - racer.speed) * cfg.acceleration_factor * cfg.fixed_time_step
        racer.speed = max(0.0, min(speed, cfg.max_speed))

        racer.distance += racer.speed * cfg.fixed_time_step
        racer.speed_history.append(racer.speed)

        if racer.distance >= cfg.race_distance:
            racer.status = RacerStatus.FINISHED
            racer.finish_time = self._state.elapsed_ms
            logger.info(
                "Racer %s finished at %.0f ms (tick %d)",
                racer.racer_id, racer.finish_time, self._state.ticks,
            )

    def _check_completion(self) -> None:
        if self._result is not None or not self._state.completed:
            return

        self._result = RaceResult(
            finish_times=MappingProxyType({rid: r.finish_time for rid, r in self._state.racers.items()}),
            speed_histories=MappingProxyType(
                {rid: tuple(r.speed_history) for rid, r in self._state.racers.items()}
            ),
        )
        logger.info(
            "Race complete after %d ticks, winner %s",
            self._state.ticks, self._result.winner,
        )

    def racer(self, racer_id: str) -> RacerState:
        """Return a copy of one racer's state.

        Raises:
            UnknownRacerError: racer_id is not in this race
        """
        racer = self._state.racers.get(racer_id)
        if racer is None:
            raise UnknownRacerError(racer_id)
        return RacerState(
            racer_id=racer.racer_id,
            noise=racer.noise,
            clock=racer.clock,
            distance=racer.distance,
            speed=racer.speed,
            speed_history=list(racer.speed_history),
            status=racer.status,
            finish_time=racer.finish_time,
        )

    def snapshot(self) -> ProgressSnapshot:
        """Copy current progress for observers."""
        distance = self.config.race_distance
        racers = self._state.racers
        return ProgressSnapshot(
            elapsed_ms=self._state.elapsed_ms,
            distance_percent=MappingProxyType(
                {rid: min(100.0, r.distance / distance * 100) for rid, r in racers.items()}
            ),
            speeds=MappingProxyType({rid: r.speed for rid, r in racers.items()}),
        )

    def result(self) -> RaceResult:
        """Return the final result.

        Raises:
            RaceNotCompleteError: Some racers are still running
        """
        if self._result is None:
            running = [rid for rid, r in self._state.racers.items() if not r.finished]
            raise RaceNotCompleteError(f"Race still running: {', '.join(running)}")
        return self._result

    def run(
        self,
        frame_interval_ms: float = DEFAULT_FRAME_INTERVAL_MS,
        max_ticks: int | None = None,
    ) -> RaceResult:
        """Run the race to completion on a synthetic wall clock.

        Timing matches a scheduler driven at a steady frame rate: the first
        frame only marks the start, so tick k happens at k * frame_interval_ms.

        Args:
            frame_interval_ms: Wall time between frames
            max_ticks: Abort after this many ticks (None = unbounded)

        Returns:
            Final RaceResult

        Raises:
            RaceStalledError: max_ticks reached before every racer finished
        """
        logger.info("Starting headless race with %d racer(s)", len(self._state.racers))
        while not self.completed:
            if max_ticks is not None and self._state.ticks >= max_ticks:
                raise RaceStalledError(f"Race not finished after {max_ticks} ticks")
            self.tick((self._state.ticks + 1) * frame_interval_ms)
        return self.result()
