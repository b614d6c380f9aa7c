"""Noise-driven derby race simulator."""

from derbysim.models import RaceConfig, RacerDescriptor, build_lineup
from derbysim.simulation import (
    ManualFrameHost,
    RaceResult,
    RaceScheduler,
    RaceSimulator,
    ValueNoise,
)

__version__ = "0.1.0"

__all__ = [
    "ManualFrameHost",
    "RaceConfig",
    "RaceResult",
    "RaceScheduler",
    "RaceSimulator",
    "RacerDescriptor",
    "ValueNoise",
    "build_lineup",
]
