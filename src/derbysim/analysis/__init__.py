"""Race statistics and Monte Carlo analysis."""

from .montecarlo import MonteCarloRunner, SimulationResults
from .summary import RaceSummary, SpeedStatistics, summarize_race

__all__ = [
    "MonteCarloRunner",
    "RaceSummary",
    "SimulationResults",
    "SpeedStatistics",
    "summarize_race",
]
