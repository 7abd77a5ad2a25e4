"""Data types for the synthetic signal subsystem."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SignalSet:
    """One transaction's synthetic readings.

    Attributes:
        raw_readings: Quantized readings, each an int in [0, 255].
        mapped_outputs: Sigmoid of each raw reading, same order, in (0, 1).
        primary_outputs: ``mapped_outputs`` after the primary rejection
            passes (1 by default).
        outputs: ``mapped_outputs`` after the full rejection passes
            (2 by default). Computed from ``mapped_outputs``, not from
            ``primary_outputs``.
    """

    raw_readings: tuple[int, ...]
    mapped_outputs: tuple[float, ...]
    primary_outputs: tuple[float, ...]
    outputs: tuple[float, ...]

    @property
    def raw_mean(self) -> float:
        """Mean of the raw readings (0.0 when empty)."""
        if not self.raw_readings:
            return 0.0
        return sum(self.raw_readings) / len(self.raw_readings)
