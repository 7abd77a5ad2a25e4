"""Statistical uniform sources for the Gaussian sampler.

These are deliberately a different type from
:class:`~signal_seal.entropy.base.EntropySource`: sampling needs a fast,
optionally seeded PRNG, while nonces and IVs need a CSPRNG. Keeping the two
apart means a seeded test generator can never end up producing key material.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar

import numpy as np

if TYPE_CHECKING:
    from collections.abc import Callable


class UniformSource(ABC):
    """Abstract source of uniform floats on [0, 1)."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Source identifier (e.g., ``'numpy'``)."""

    @abstractmethod
    def random(self) -> float:
        """Return one float in [0, 1)."""


class UniformSourceRegistry:
    """Registry mapping string names to UniformSource classes.

    Every registered class must accept a single ``seed`` keyword argument.
    """

    _registry: ClassVar[dict[str, type[UniformSource]]] = {}

    @classmethod
    def register(cls, name: str) -> Callable[[type[UniformSource]], type[UniformSource]]:
        """Decorator that registers a UniformSource class under *name*.

        Raises:
            ValueError: If *name* is already registered.
        """

        def decorator(klass: type[UniformSource]) -> type[UniformSource]:
            if name in cls._registry:
                raise ValueError(f"Uniform source '{name}' is already registered")
            cls._registry[name] = klass
            return klass

        return decorator

    @classmethod
    def get(cls, name: str) -> type[UniformSource]:
        """Return the class registered under *name*.

        Raises:
            KeyError: If *name* is not registered.
        """
        if name not in cls._registry:
            available = ", ".join(sorted(cls._registry)) or "(none)"
            raise KeyError(f"Unknown uniform source '{name}'. Available: {available}")
        return cls._registry[name]

    @classmethod
    def build(cls, name: str, seed: int | None = None) -> UniformSource:
        """Instantiate the source registered under *name*."""
        return cls.get(name)(seed=seed)  # type: ignore[call-arg]

    @classmethod
    def list_registered(cls) -> list[str]:
        """Return sorted list of registered source names."""
        return sorted(cls._registry)


@UniformSourceRegistry.register("numpy")
class NumpyUniformSource(UniformSource):
    """``numpy.random.default_rng`` (PCG64) uniform source.

    Args:
        seed: Optional seed; ``None`` draws a fresh seed from the OS.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._rng = np.random.default_rng(seed)

    @property
    def name(self) -> str:
        return "numpy"

    def random(self) -> float:
        return float(self._rng.random())


@UniformSourceRegistry.register("sequence")
class SequenceUniformSource(UniformSource):
    """Replays a fixed list of values, cycling when exhausted.

    Useful for pinning the exact draws the Gaussian sampler sees, including
    the exact-zero redraw case. ``seed`` is accepted for registry
    compatibility and ignored.

    Args:
        values: Values to replay, each in [0, 1).
        seed: Ignored.

    Raises:
        ValueError: If every value is 0.0, since the sampler would redraw
            forever.
    """

    def __init__(self, values: list[float] | None = None, seed: int | None = None) -> None:
        self._values = list(values) if values else [0.5]
        if all(v == 0.0 for v in self._values):
            raise ValueError("Sequence must contain at least one non-zero value")
        self._index = 0

    @property
    def name(self) -> str:
        return "sequence"

    def random(self) -> float:
        value = self._values[self._index % len(self._values)]
        self._index += 1
        return value
