"""Synthetic signal generator.

Produces one transaction's readings:

    gaussian -> raw = clamp(round(center + scale * z), 0, 255)
             -> mapped = sigmoid((raw - center) / sigmoid_scale)
             -> primary view (1 rejection pass), output view (2 passes)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from signal_seal.signals.filters import reject_outliers
from signal_seal.signals.types import SignalSet

if TYPE_CHECKING:
    from signal_seal.config import SignalSealConfig
    from signal_seal.sampling.gaussian import GaussianSampler

RAW_MIN = 0
RAW_MAX = 255


def quantize(values: np.ndarray) -> np.ndarray:
    """Round half up and clamp to the raw reading range.

    ``floor(x + 0.5)`` rather than ``np.round``: numpy rounds halves to even,
    which would bias readings that land exactly on ``.5``.
    """
    rounded = np.floor(values + 0.5)
    return np.clip(rounded, RAW_MIN, RAW_MAX).astype(np.int64)


def sigmoid(x: np.ndarray) -> np.ndarray:
    """Numerically stable logistic function.

    Splits on sign so ``exp`` never overflows. For finite inputs of moderate
    size the result stays strictly inside (0, 1).
    """
    x = np.asarray(x, dtype=np.float64)
    out = np.empty_like(x)
    pos = x >= 0
    out[pos] = 1.0 / (1.0 + np.exp(-x[pos]))
    exp_x = np.exp(x[~pos])
    out[~pos] = exp_x / (1.0 + exp_x)
    return out


class SyntheticSignalGenerator:
    """Builds a :class:`SignalSet` from Gaussian samples.

    Args:
        sampler: Gaussian sampler supplying N(0, 1) draws.
        config: Provides ``sample_count``, ``raw_center``, ``raw_scale``,
            ``sigmoid_scale``, ``outlier_threshold``, ``primary_passes``
            and ``output_passes``.
    """

    def __init__(self, sampler: GaussianSampler, config: SignalSealConfig) -> None:
        self._sampler = sampler
        self._config = config

    def raw_readings(self, count: int) -> np.ndarray:
        """Draw *count* quantized raw readings."""
        z = self._sampler.samples(count)
        return quantize(self._config.raw_center + self._config.raw_scale * z)

    def map_readings(self, raws: np.ndarray) -> np.ndarray:
        """Map raw readings through the sigmoid transfer function."""
        centred = (np.asarray(raws, dtype=np.float64) - self._config.raw_center)
        return sigmoid(centred / self._config.sigmoid_scale)

    def generate(self, count: int | None = None) -> SignalSet:
        """Generate one signal set.

        Args:
            count: Number of readings; defaults to ``config.sample_count``.

        Returns:
            A frozen SignalSet.
        """
        if count is None:
            count = self._config.sample_count

        raws = self.raw_readings(count)
        mapped = self.map_readings(raws)
        threshold = self._config.outlier_threshold

        return SignalSet(
            raw_readings=tuple(int(r) for r in raws),
            mapped_outputs=tuple(float(v) for v in mapped),
            primary_outputs=reject_outliers(mapped, self._config.primary_passes, threshold),
            outputs=reject_outliers(mapped, self._config.output_passes, threshold),
        )
