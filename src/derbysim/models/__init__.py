"""Data models for derby simulation."""

from .config import RaceConfig
from .lineup import build_lineup
from .racer import RacerDescriptor

__all__ = [
    "RaceConfig",
    "RacerDescriptor",
    "build_lineup",
]
