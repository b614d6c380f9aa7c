"""Simulation engine components."""

from .errors import (
    ClockError,
    RaceError,
    RaceNotCompleteError,
    RaceSetupError,
    RaceStalledError,
    UnknownRacerError,
)
from .frames import AsyncioFrameHost, FrameHost, ManualFrameHost
from .noise import ValueNoise
from .race import ProgressSnapshot, RaceResult, RaceSimulator, RacerStatus
from .scheduler import RaceScheduler

__all__ = [
    "AsyncioFrameHost",
    "ClockError",
    "FrameHost",
    "ManualFrameHost",
    "ProgressSnapshot",
    "RaceError",
    "RaceNotCompleteError",
    "RaceResult",
    "RaceScheduler",
    "RaceSetupError",
    "RaceSimulator",
    "RaceStalledError",
    "RacerStatus",
    "UnknownRacerError",
    "ValueNoise",
]
