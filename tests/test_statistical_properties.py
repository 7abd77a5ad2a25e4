"""Statistical property tests for the synthetic signal path.

These check distributional invariants rather than individual code paths:

1. The Box-Muller sampler produces standard-normal draws (KS test).
2. Raw readings centre on ``raw_center`` with spread close to ``raw_scale``.
3. Mapped outputs sit strictly inside (0, 1) and are symmetric about 0.5.

Dependencies:
    scipy (KS test), listed in the ``test`` extra.
"""

from __future__ import annotations

import numpy as np
import pytest
from scipy import stats

from signal_seal.config import SignalSealConfig
from signal_seal.sampling.gaussian import GaussianSampler
from signal_seal.sampling.uniform import NumpyUniformSource
from signal_seal.signals.generator import SyntheticSignalGenerator

_NUM_SAMPLES: int = 100_000
_KS_SAMPLES: int = 20_000
_KS_ALPHA: float = 0.01


@pytest.fixture(scope="module")
def raws() -> np.ndarray:
    config = SignalSealConfig(_env_file=None)  # type: ignore[call-arg]
    generator = SyntheticSignalGenerator(GaussianSampler(NumpyUniformSource(seed=2024)), config)
    return generator.raw_readings(_NUM_SAMPLES)


class TestGaussianSampler:
    def test_standard_normal_ks(self) -> None:
        z = GaussianSampler(NumpyUniformSource(seed=99)).samples(_KS_SAMPLES)
        result = stats.kstest(z, "norm")
        assert result.pvalue > _KS_ALPHA

    def test_moments(self) -> None:
        z = GaussianSampler(NumpyUniformSource(seed=5)).samples(_KS_SAMPLES)
        assert abs(float(np.mean(z))) < 0.05
        assert abs(float(np.std(z)) - 1.0) < 0.05


class TestRawReadings:
    def test_mean_near_centre(self, raws: np.ndarray) -> None:
        assert abs(float(np.mean(raws)) - 127.0) < 2.0

    def test_std_near_scale(self, raws: np.ndarray) -> None:
        assert abs(float(np.std(raws)) - 40.0) < 5.0

    def test_range(self, raws: np.ndarray) -> None:
        assert raws.min() >= 0
        assert raws.max() <= 255

    def test_clamping_occurs_in_tails(self, raws: np.ndarray) -> None:
        # 127 / 40 is about 3.2 sigma, so a 100k sample reaches both bounds.
        assert raws.min() == 0
        assert raws.max() == 255


class TestMappedOutputs:
    def test_open_unit_interval(self, raws: np.ndarray) -> None:
        config = SignalSealConfig(_env_file=None)  # type: ignore[call-arg]
        generator = SyntheticSignalGenerator(GaussianSampler(NumpyUniformSource(seed=1)), config)
        mapped = generator.map_readings(raws)
        assert np.all(mapped > 0.0)
        assert np.all(mapped < 1.0)
        assert abs(float(np.mean(mapped)) - 0.5) < 0.01
