"""Shared pytest fixtures for signal-seal tests.

Provides environment-isolated configuration objects, seeded randomness
sources, and sample device records used across multiple test modules.
"""

from __future__ import annotations

import pytest

from signal_seal.config import SignalSealConfig
from signal_seal.entropy.mock import MockEntropySource
from signal_seal.payload.types import BrowserFingerprint, MediaDeviceInfo, TransactionContext
from signal_seal.sampling.gaussian import GaussianSampler
from signal_seal.sampling.uniform import NumpyUniformSource


@pytest.fixture
def default_config() -> SignalSealConfig:
    """Return a config with all default values (no .env file)."""
    return SignalSealConfig(_env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def silent_config() -> SignalSealConfig:
    """Return a config with no logging for noise-free tests."""
    return SignalSealConfig(_env_file=None, log_level="none")  # type: ignore[call-arg]


@pytest.fixture
def mock_entropy() -> MockEntropySource:
    """Seeded CSPRNG stand-in, so nonces and IVs are reproducible."""
    return MockEntropySource(seed=42)


@pytest.fixture
def seeded_uniform() -> NumpyUniformSource:
    """Seeded statistical source."""
    return NumpyUniformSource(seed=12345)


@pytest.fixture
def seeded_sampler(seeded_uniform: NumpyUniformSource) -> GaussianSampler:
    """Gaussian sampler over the seeded uniform source."""
    return GaussianSampler(seeded_uniform)


@pytest.fixture
def browser_info() -> BrowserFingerprint:
    """A typical desktop browser snapshot."""
    return BrowserFingerprint(
        userAgent="Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7)",
        language="en-US",
        platform="MacIntel",
        screenWidth=1512,
        screenHeight=982,
        colorDepth=30,
        timezoneOffset=-60,
        cookiesEnabled=True,
        webdriver=False,
        hardwareConcurrency=8,
        deviceMemory=8,
    )


@pytest.fixture
def device_info() -> MediaDeviceInfo:
    """The default video input record."""
    return MediaDeviceInfo()


@pytest.fixture
def context() -> TransactionContext:
    """A fixed transaction context with a timestamp in the first half-second."""
    return TransactionContext(
        transaction_id="8f14e45f-ceea-467a-9a3c-6f2f3e6d6d6d",
        timestamp_ms=1_700_000_000_250,
        nonce=bytes(range(16)),
    )
