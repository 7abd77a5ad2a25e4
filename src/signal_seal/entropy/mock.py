"""Seeded mock entropy source for deterministic tests.

NOT cryptographically secure. With a fixed seed, the nonce, IV and
transaction id of a pipeline run are reproducible, which lets tests pin
the derived key and re-open sealed payloads.
"""

from __future__ import annotations

import numpy as np

from signal_seal.entropy.base import EntropySource
from signal_seal.entropy.registry import register_entropy_source
from signal_seal.exceptions import EntropyUnavailableError


@register_entropy_source("mock")
class MockEntropySource(EntropySource):
    """Deterministic byte source for testing.

    Args:
        seed: Optional RNG seed for reproducible output.
        available: When ``False`` every request raises
            :class:`~signal_seal.exceptions.EntropyUnavailableError`, which
            lets tests exercise the failure path.
    """

    def __init__(self, seed: int | None = None, available: bool = True) -> None:
        self._seed = seed
        self._available = available
        self._rng = np.random.default_rng(seed)

    @property
    def name(self) -> str:
        """Return ``'mock'``."""
        return "mock"

    @property
    def is_available(self) -> bool:
        return self._available

    def get_random_bytes(self, n: int) -> bytes:
        """Draw *n* uniform bytes from the seeded generator.

        Raises:
            EntropyUnavailableError: If the source was built unavailable.
        """
        if not self._available:
            raise EntropyUnavailableError("Mock entropy source is marked unavailable")
        return self._rng.integers(0, 256, size=n, dtype=np.uint8).tobytes()

    def close(self) -> None:
        """No-op."""
