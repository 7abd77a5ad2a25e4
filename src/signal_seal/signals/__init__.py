"""Synthetic signal subsystem for signal-seal."""

from signal_seal.signals.filters import reject_outliers, reject_outliers_once
from signal_seal.signals.generator import SyntheticSignalGenerator, quantize, sigmoid
from signal_seal.signals.telemetry import scaled_shift, state_timeline
from signal_seal.signals.types import SignalSet

__all__ = [
    "SignalSet",
    "SyntheticSignalGenerator",
    "quantize",
    "reject_outliers",
    "reject_outliers_once",
    "scaled_shift",
    "sigmoid",
    "state_timeline",
]
