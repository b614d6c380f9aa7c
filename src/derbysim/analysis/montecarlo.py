"""Monte Carlo race runner and statistics."""

import logging
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field

import numpy as np

from derbysim.models import RaceConfig, RacerDescriptor
from derbysim.simulation.noise import ValueNoise
from derbysim.simulation.race import DEFAULT_FRAME_INTERVAL_MS, RaceSimulator

logger = logging.getLogger(__name__)


@dataclass
class RacerStatistics:
    """Aggregated statistics for one grid slot across races."""

    racer_id: str
    wins: int = 0
    finish_times: list[float] = field(default_factory=list)

    @property
    def win_rate(self) -> float:
        """Win percentage."""
        return self.wins / len(self.finish_times) * 100 if self.finish_times else 0

    @property
    def mean_finish_time(self) -> float:
        """Average finish time in milliseconds."""
        return float(np.mean(self.finish_times)) if self.finish_times else 0.0


@dataclass
class RaceSample:
    """Outcome of one simulated race."""

    seeds: dict[str, float]
    finish_times: dict[str, float]
    mean_noise: dict[str, float]  # Over the window before the first finish
    winner: str


@dataclass
class SimulationResults:
    """Results from Monte Carlo simulation."""

    num_simulations: int
    racer_stats: dict[str, RacerStatistics]
    races: list[RaceSample]

    def get_win_probabilities(self) -> dict[str, float]:
        """Win percentage per racer, best first."""
        return {
            racer_id: stats.win_rate
            for racer_id, stats in sorted(
                self.racer_stats.items(),
                key=lambda x: (-x[1].wins, x[0]),
            )
        }

    def noisiest_racer_win_rate(self) -> float:
        """Fraction of races won by the racer with the highest mean noise."""
        if not self.races:
            return 0.0
        wins = sum(
            1 for race in self.races
            if race.winner == min(race.mean_noise, key=lambda rid: (-race.mean_noise[rid], rid))
        )
        return wins / len(self.races)

    def mean_finish_time_by_noise_rank(self) -> list[float]:
        """Average finish time for each noise rank (0 = highest mean noise)."""
        by_rank: dict[int, list[float]] = {}
        for race in self.races:
            ranked = sorted(race.mean_noise, key=lambda rid: (-race.mean_noise[rid], rid))
            for rank, racer_id in enumerate(ranked):
                by_rank.setdefault(rank, []).append(race.finish_times[racer_id])
        return [float(np.mean(by_rank[rank])) for rank in sorted(by_rank)]


def _run_single_race(args: tuple) -> RaceSample:
    """Run a single race (for multiprocessing).

    Args:
        args: Tuple of (seeds, config_data, frame_interval_ms)

    Returns:
        RaceSample for the race
    """
    seeds, config_data, frame_interval_ms = args
    config = RaceConfig.model_validate(config_data)

    racers = [RacerDescriptor(id=racer_id, seed=seed) for racer_id, seed in seeds.items()]
    result = RaceSimulator(racers, config).run(frame_interval_ms=frame_interval_ms)

    # Compare noise over the stretch every racer actually ran
    window = min(len(history) for history in result.speed_histories.values())
    clocks = config.clock_step * np.arange(1, window + 1)
    mean_noise = {
        racer_id: float(ValueNoise(seed).sample_array(clocks).mean())
        for racer_id, seed in seeds.items()
    }

    return RaceSample(
        seeds=dict(seeds),
        finish_times=dict(result.finish_times),
        mean_noise=mean_noise,
        winner=result.winner,
    )


class MonteCarloRunner:
    """Runs many races with random seeds and aggregates the outcomes."""

    def __init__(
        self,
        num_racers: int = 2,
        config: RaceConfig | None = None,
        seed: int | None = None,
        frame_interval_ms: float = DEFAULT_FRAME_INTERVAL_MS,
    ):
        """Initialize Monte Carlo runner.

        Args:
            num_racers: Racers per race
            config: Race constants
            seed: Random seed for reproducibility
            frame_interval_ms: Synthetic frame interval for headless races
        """
        if num_racers < 1:
            raise ValueError("num_racers must be at least 1")
        self.num_racers = num_racers
        self.config = config if config is not None else RaceConfig()
        self.base_seed = seed if seed is not None else int(np.random.default_rng().integers(0, 2**31))
        self.frame_interval_ms = frame_interval_ms

    def racer_ids(self) -> list[str]:
        return [f"racer-{i}" for i in range(self.num_racers)]

    def run(
        self,
        num_simulations: int = 1000,
        parallel: bool = True,
        max_workers: int | None = None,
    ) -> SimulationResults:
        """Run Monte Carlo simulations.

        Args:
            num_simulations: Number of races to run
            parallel: Whether to use parallel processing
            max_workers: Maximum parallel workers (None = CPU count)

        Returns:
            SimulationResults with aggregated statistics
        """
        rng = np.random.default_rng(self.base_seed)
        seed_matrix = rng.random((num_simulations, self.num_racers))
        racer_ids = self.racer_ids()
        config_data = self.config.model_dump()

        args_list = [
            (dict(zip(racer_ids, map(float, row))), config_data, self.frame_interval_ms)
            for row in seed_matrix
        ]

        logger.info(
            "Running %d races of %d racer(s) (seed %d, parallel=%s)",
            num_simulations, self.num_racers, self.base_seed, parallel,
        )

        if parallel and num_simulations > 1:
            with ProcessPoolExecutor(max_workers=max_workers) as executor:
                races = list(executor.map(_run_single_race, args_list))
        else:
            races = [_run_single_race(args) for args in args_list]

        return SimulationResults(
            num_simulations=num_simulations,
            racer_stats=self._aggregate_statistics(races),
            races=races,
        )

    def _aggregate_statistics(self, races: list[RaceSample]) -> dict[str, RacerStatistics]:
        stats = {racer_id: RacerStatistics(racer_id=racer_id) for racer_id in self.racer_ids()}
        for race in races:
            stats[race.winner].wins += 1
            for racer_id, finish_time in race.finish_times.items():
                stats[racer_id].finish_times.append(finish_time)
        return stats

    def run_quick(self, num_simulations: int = 100) -> SimulationResults:
        """Run without parallelization.

        Useful for testing or when running in environments
        where multiprocessing is problematic.
        """
        return self.run(num_simulations=num_simulations, parallel=False)
