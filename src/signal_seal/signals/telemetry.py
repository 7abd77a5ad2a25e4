"""Interaction telemetry fields carried in the plaintext payload.

Neither field models a measured signal; both follow a fixed formula so
the payload stays wire-compatible with existing consumers.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from signal_seal.sampling.uniform import UniformSource

X_SHIFT = 0.0005
Y_SHIFT = 0.0002

# (offset_ms, jitter_ms) for each timeline point after the base reading.
_TIMELINE_STEPS: tuple[tuple[float, float], ...] = (
    (45.0, 30.0),
    (120.0, 50.0),
    (190.0, 40.0),
    (250.0, 60.0),
)


def scaled_shift(timestamp_ms: int) -> tuple[float, float]:
    """Return ``(xScaledShiftAmt, yScaledShiftAmt)`` for a timestamp.

    The first half of each wall-clock second gives positive shifts, the
    second half negative ones.
    """
    if timestamp_ms % 1000 < 500:
        return X_SHIFT, Y_SHIFT
    return -X_SHIFT, -Y_SHIFT


def monotonic_ms() -> float:
    """Monotonic clock reading in milliseconds."""
    return time.perf_counter() * 1000.0


def state_timeline(
    uniform: UniformSource,
    clock: Callable[[], float] = monotonic_ms,
) -> list[float]:
    """Return five increasing timestamps starting at ``clock()``.

    Point ``k`` is ``base + offset_k + U * jitter_k``; the offset windows do
    not overlap, so the list is strictly increasing.
    """
    base = clock()
    return [base] + [base + offset + uniform.random() * jitter for offset, jitter in _TIMELINE_STEPS]
