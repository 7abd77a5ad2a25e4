"""Diagnostic logging subsystem for signal-seal.

Provides immutable per-transaction records and a configurable logger that
supports none/summary/full verbosity and in-memory diagnostic mode.
"""

from signal_seal.logging.logger import PipelineLogger
from signal_seal.logging.types import SealRecord

__all__ = [
    "PipelineLogger",
    "SealRecord",
]
