"""The interface every cryptographic randomness source implements.

These sources back the values an attacker must not predict: the
per-transaction nonce, the AES-GCM IV and the transaction id. The Gaussian
sampler draws from :mod:`signal_seal.sampling.uniform` instead, so a seeded
statistical generator can never leak into key material.
"""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from typing import Any


class EntropySource(ABC):
    """A supplier of unpredictable bytes.

    Implementations provide ``name``, ``is_available``,
    ``get_random_bytes()`` and ``close()``. UUID generation and the health
    report come for free.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Registry key of the source, e.g. ``'system'``."""

    @property
    @abstractmethod
    def is_available(self) -> bool:
        """``False`` when a call to :meth:`get_random_bytes` would fail."""

    @abstractmethod
    def get_random_bytes(self, n: int) -> bytes:
        """Draw *n* bytes.

        Raises:
            EntropyUnavailableError: When the source cannot deliver.
        """

    @abstractmethod
    def close(self) -> None:
        """Free any handle the source keeps open."""

    def random_uuid(self) -> str:
        """Canonical UUID-4 text built from 16 bytes of this source.

        ``uuid.UUID(version=4)`` forces the version and variant bits, leaving
        122 bits from the source.
        """
        return str(uuid.UUID(bytes=self.get_random_bytes(16), version=4))

    def health_check(self) -> dict[str, Any]:
        return {"source": self.name, "healthy": self.is_available}
