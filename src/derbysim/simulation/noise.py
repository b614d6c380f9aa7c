"""Seeded one-dimensional value noise."""

import math

import numpy as np

TABLE_SIZE = 256

# Linear congruential generator constants (Numerical Recipes)
LCG_MULTIPLIER = 1664525
LCG_INCREMENT = 1013904223
LCG_MODULUS = 2**32


class ValueNoise:
    """Smooth pseudo-random scalar field over the real line.

    A table of 256 random values is generated once from the seed; samples
    between integer coordinates are cosine-interpolated, so the field is
    continuous and periodic with period 256.
    """

    def __init__(self, seed: float):
        """Initialize the noise table.

        Args:
            seed: Any finite real. Equal seeds give identical fields.
        """
        self.seed = float(seed)
        self._state = self.seed * 1e9
        self.values = np.array([self._next_random() for _ in range(TABLE_SIZE)], dtype=np.float64)

    def _next_random(self) -> float:
        # Python's % keeps the state non-negative even for negative seeds
        self._state = (LCG_MULTIPLIER * self._state + LCG_INCREMENT) % LCG_MODULUS
        if self._state >= LCG_MODULUS:
            # float modulo of a tiny negative rounds up to the modulus
            self._state = 0.0
        return self._state / LCG_MODULUS

    @staticmethod
    def _smooth(t):
        """Cosine easing of t in [0, 1], for scalars and arrays alike."""
        return (1 - np.cos(t * math.pi)) / 2

    def sample(self, x: float) -> float:
        """Sample the field at x.

        Args:
            x: Any finite real coordinate

        Returns:
            Value in [0, 1)
        """
        x_floor = math.floor(x)
        t = x - x_floor

        v0 = self.values[x_floor % TABLE_SIZE]
        v1 = self.values[(x_floor + 1) % TABLE_SIZE]

        t_smooth = self._smooth(t)
        return float(v0 * (1 - t_smooth) + v1 * t_smooth)

    def sample_array(self, xs) -> np.ndarray:
        """Vectorized `sample` over an array of coordinates."""
        xs = np.asarray(xs, dtype=np.float64)
        x_floor = np.floor(xs)
        t_smooth = self._smooth(xs - x_floor)

        idx = x_floor.astype(np.int64)
        v0 = self.values[idx % TABLE_SIZE]
        v1 = self.values[(idx + 1) % TABLE_SIZE]
        return v0 * (1 - t_smooth) + v1 * t_smooth

    def __repr__(self) -> str:
        return f"ValueNoise(seed={self.seed!r})"
