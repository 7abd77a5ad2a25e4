"""Box–Muller Gaussian sampler."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from signal_seal.sampling.uniform import UniformSource

_TWO_PI = 2.0 * math.pi


class GaussianSampler:
    """Standard-normal samples from two independent uniform draws.

    Each sample uses ``z = sqrt(-2 ln u) * cos(2 pi v)``. A draw of exactly
    0.0 is discarded and redrawn; ``u = 0`` would put ``ln(0)`` in the
    formula, and ``v`` is treated the same way for symmetry.

    Args:
        uniform: Source of uniform floats on [0, 1).
    """

    def __init__(self, uniform: UniformSource) -> None:
        self._uniform = uniform

    @property
    def uniform(self) -> UniformSource:
        """The underlying uniform source."""
        return self._uniform

    def _nonzero_draw(self) -> float:
        value = 0.0
        while value == 0.0:
            value = self._uniform.random()
        return value

    def sample(self) -> float:
        """Return one N(0, 1) sample."""
        u = self._nonzero_draw()
        v = self._nonzero_draw()
        return math.sqrt(-2.0 * math.log(u)) * math.cos(_TWO_PI * v)

    def samples(self, n: int) -> np.ndarray:
        """Return *n* N(0, 1) samples as a float64 array."""
        out = np.empty(n, dtype=np.float64)
        for i in range(n):
            out[i] = self.sample()
        return out
