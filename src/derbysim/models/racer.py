"""Racer descriptors supplied before a race starts."""

import math

from pydantic import BaseModel, Field, field_validator


class RacerDescriptor(BaseModel):
    """Identifies a racer and the seed of its noise field."""

    id: str = Field(..., min_length=1, description="Unique racer identifier (e.g., 'player')")
    seed: float = Field(..., description="Noise seed; equal seeds race identically")
    label: str | None = Field(default=None, description="Display name, never used by the simulation")

    @field_validator("seed")
    @classmethod
    def _seed_is_finite(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("seed must be a finite number")
        return value

    @property
    def display_name(self) -> str:
        """Label if one was assigned, otherwise the id."""
        return self.label or self.id
