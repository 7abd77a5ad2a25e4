"""Operating-system CSPRNG source (the default)."""

from __future__ import annotations

import os

from signal_seal.entropy.base import EntropySource
from signal_seal.entropy.registry import register_entropy_source


@register_entropy_source("system")
class SystemEntropySource(EntropySource):
    """Nonces, IVs and transaction ids straight from ``os.urandom()``.

    Stateless, so a single instance is safe to share across threads.
    """

    @property
    def name(self) -> str:
        return "system"

    @property
    def is_available(self) -> bool:
        return True

    def get_random_bytes(self, n: int) -> bytes:
        """Return *n* bytes from the OS CSPRNG.

        Raises:
            ValueError: If *n* is negative.
        """
        if n < 0:
            raise ValueError(f"Cannot draw a negative number of bytes: {n}")
        return os.urandom(n)

    def close(self) -> None:
        """Nothing to release."""
