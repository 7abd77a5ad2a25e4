"""signal-seal: synthetic signal payloads sealed under per-transaction keys.

Generates a set of synthetic sensor readings, embeds them with device
records in a JSON payload, derives a fresh AES-256 key per transaction via
HKDF-SHA256, and seals the payload with AES-GCM for an injected transport.
"""

from __future__ import annotations

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("signal-seal")
except PackageNotFoundError:
    __version__ = "0.0.0"

from signal_seal.config import SignalSealConfig, resolve_config, validate_overrides
from signal_seal.exceptions import (
    AuthenticationFailedError,
    ConfigValidationError,
    CryptoError,
    DerivationLengthExceededError,
    EntropyUnavailableError,
    InvalidKeyMaterialError,
    InvalidNonceLengthError,
    SerializationError,
    SignalSealError,
    TransportError,
)
from signal_seal.payload.types import BrowserFingerprint, MediaDeviceInfo, TransactionContext
from signal_seal.pipeline import SealingPipeline, SealResult, seal_payload

__all__ = [
    "AuthenticationFailedError",
    "BrowserFingerprint",
    "ConfigValidationError",
    "CryptoError",
    "DerivationLengthExceededError",
    "EntropyUnavailableError",
    "InvalidKeyMaterialError",
    "InvalidNonceLengthError",
    "MediaDeviceInfo",
    "SealResult",
    "SealingPipeline",
    "SerializationError",
    "SignalSealError",
    "TransactionContext",
    "TransportError",
    "__version__",
    "resolve_config",
    "seal_payload",
    "validate_overrides",
]
