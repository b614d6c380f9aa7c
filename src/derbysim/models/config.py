"""Race configuration."""

import tomllib
from pathlib import Path

from pydantic import BaseModel, Field


class RaceConfig(BaseModel):
    """Physics and scheduling constants for a race."""

    race_distance: float = Field(
        default=400.0,
        gt=0.0,
        description="Finish distance in meters",
    )
    max_speed: float = Field(
        default=20.0,
        gt=0.0,
        description="Top speed in meters per second (~72 km/h)",
    )
    acceleration_factor: float = Field(
        default=2.0,
        gt=0.0,
        description="How quickly a racer closes the gap to its target speed",
    )
    fixed_time_step: float = Field(
        default=1 / 60,
        gt=0.0,
        le=1.0,
        description="Physics step in seconds, applied once per tick",
    )
    broadcast_interval_ms: float = Field(
        default=100.0,
        ge=0.0,
        description="Minimum wall time between progress snapshots",
    )
    clock_step: float = Field(
        default=0.1,
        gt=0.0,
        description="Noise sampling clock increment per tick",
    )
    min_racers: int = Field(
        default=1,
        ge=1,
        description="Smallest field a race can start with",
    )

    @classmethod
    def from_toml(cls, path: str | Path) -> "RaceConfig":
        """Load configuration from a TOML file.

        Keys may sit at the top level or inside a ``[race]`` table.

        Args:
            path: Path to the TOML file

        Returns:
            Validated RaceConfig
        """
        with Path(path).open("rb") as f:
            data = tomllib.load(f)
        return cls.model_validate(data.get("race", data))
