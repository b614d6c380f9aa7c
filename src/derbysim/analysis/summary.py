"""Post-race speed statistics and highlights."""

from dataclasses import dataclass

import numpy as np

from derbysim.simulation.race import RaceResult


@dataclass
class SpeedStatistics:
    """Speed profile of one racer over a race."""

    racer_id: str
    max_speed: float
    avg_speed: float
    min_speed: float
    ticks: int


@dataclass
class RaceSummary:
    """Per-racer speed statistics plus race highlights."""

    stats: dict[str, SpeedStatistics]
    top_speed: SpeedStatistics | None = None  # Racer with the highest peak
    slowest_moment: SpeedStatistics | None = None  # Racer with the lowest trough


def summarize_race(result: RaceResult) -> RaceSummary:
    """Compute speed statistics for every racer in a finished race.

    Args:
        result: Completed race result

    Returns:
        RaceSummary; highlight ties go to the lower racer id
    """
    stats: dict[str, SpeedStatistics] = {}
    for racer_id in sorted(result.speed_histories):
        history = np.asarray(result.speed_histories[racer_id], dtype=np.float64)
        if history.size == 0:
            continue
        stats[racer_id] = SpeedStatistics(
            racer_id=racer_id,
            max_speed=float(history.max()),
            avg_speed=float(history.mean()),
            min_speed=float(history.min()),
            ticks=int(history.size),
        )

    summary = RaceSummary(stats=stats)
    for racer_stats in stats.values():
        if summary.top_speed is None or racer_stats.max_speed > summary.top_speed.max_speed:
            summary.top_speed = racer_stats
        if summary.slowest_moment is None or racer_stats.min_speed < summary.slowest_moment.min_speed:
            summary.slowest_moment = racer_stats

    return summary
