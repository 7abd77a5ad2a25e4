"""Z-score outlier rejection."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np


def reject_outliers_once(values: np.ndarray, threshold: float = 3.0) -> np.ndarray:
    """Run one rejection pass over *values*.

    Computes the mean and population standard deviation (``ddof=0``) and
    keeps the values with ``|v - mean| <= threshold * std``, preserving
    order. A degenerate set (``std == 0``) and an empty set come back
    unchanged.

    Args:
        values: 1-D float array.
        threshold: Allowed distance from the mean, in standard deviations.

    Returns:
        The surviving values, in their original order.
    """
    if values.size == 0:
        return values
    mean = float(np.mean(values))
    std = float(np.std(values))
    if std == 0.0:
        return values
    return values[np.abs(values - mean) <= threshold * std]


def reject_outliers(
    values: Sequence[float] | np.ndarray,
    passes: int = 1,
    threshold: float = 3.0,
) -> tuple[float, ...]:
    """Apply *passes* sequential rejection passes.

    Each pass recomputes the statistics from the previous pass's survivors,
    so two passes may drop values a single pass keeps.

    Args:
        values: Input values.
        passes: Number of passes; 0 returns the input unchanged.
        threshold: Allowed distance from the mean, in standard deviations.

    Returns:
        Surviving values as a tuple of Python floats.
    """
    data = np.asarray(values, dtype=np.float64)
    for _ in range(passes):
        data = reject_outliers_once(data, threshold)
    return tuple(float(v) for v in data)
