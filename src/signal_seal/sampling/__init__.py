"""Statistical sampling subsystem for signal-seal.

Uniform sources feed the Box–Muller :class:`GaussianSampler`, which in turn
drives the synthetic signal generator.
"""

from signal_seal.sampling.gaussian import GaussianSampler
from signal_seal.sampling.uniform import (
    NumpyUniformSource,
    SequenceUniformSource,
    UniformSource,
    UniformSourceRegistry,
)

__all__ = [
    "GaussianSampler",
    "NumpyUniformSource",
    "SequenceUniformSource",
    "UniformSource",
    "UniformSourceRegistry",
]
