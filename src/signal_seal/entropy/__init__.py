"""Cryptographic entropy subsystem for signal-seal.

Re-exports the ABC, registry, and built-in source implementations::

    from signal_seal.entropy import EntropySource, EntropySourceRegistry
    from signal_seal.entropy import SystemEntropySource, MockEntropySource
"""

from signal_seal.entropy.base import EntropySource
from signal_seal.entropy.mock import MockEntropySource
from signal_seal.entropy.registry import EntropySourceRegistry, register_entropy_source
from signal_seal.entropy.system import SystemEntropySource

__all__ = [
    "EntropySource",
    "EntropySourceRegistry",
    "MockEntropySource",
    "SystemEntropySource",
    "register_entropy_source",
]
