"""Payload assembly: plaintext build, key derivation, and sealing.

One :meth:`PayloadAssembler.build` call:

    1. Builds the plaintext dict (signals, telemetry, device records).
    2. Encodes it as compact UTF-8 JSON.
    3. Builds IKM = nonce(16) || timestamp_ms(u64 LE) || transaction_id(UTF-8).
    4. Derives a 32-byte key with HKDF-SHA256 (fixed salt and context).
    5. Encrypts under AES-256-GCM with a fresh 12-byte IV.

The key and plaintext exist only as locals of that call.
"""

from __future__ import annotations

import json
import struct
from typing import TYPE_CHECKING, Any

from signal_seal.crypto.aead import AeadCipher
from signal_seal.crypto.kdf import KeyDeriver
from signal_seal.exceptions import SerializationError
from signal_seal.signals.telemetry import monotonic_ms, scaled_shift, state_timeline

if TYPE_CHECKING:
    from collections.abc import Callable

    from signal_seal.config import SignalSealConfig
    from signal_seal.crypto.aead import SealedPayload
    from signal_seal.entropy.base import EntropySource
    from signal_seal.payload.types import BrowserFingerprint, MediaDeviceInfo, TransactionContext
    from signal_seal.sampling.uniform import UniformSource
    from signal_seal.signals.types import SignalSet

_TIMESTAMP = struct.Struct("<Q")


def build_ikm(context: TransactionContext) -> bytes:
    """Return the HKDF input keying material for *context*."""
    return (
        context.nonce
        + _TIMESTAMP.pack(context.timestamp_ms)
        + context.transaction_id.encode("utf-8")
    )


def build_plaintext(
    context: TransactionContext,
    signal_set: SignalSet,
    device_info: MediaDeviceInfo,
    browser_info: BrowserFingerprint,
    timeline: list[float],
    method: int = 3,
) -> dict[str, Any]:
    """Return the plaintext structure in its wire layout."""
    x_shift, y_shift = scaled_shift(context.timestamp_ms)
    return {
        "method": method,
        "predictions": {
            "outputs": list(signal_set.outputs),
            "primaryOutputs": list(signal_set.primary_outputs),
            "raws": list(signal_set.raw_readings),
            "xScaledShiftAmt": x_shift,
            "yScaledShiftAmt": y_shift,
            "mediaDeviceInfo": device_info.to_wire(),
            "stateTimeline": list(timeline),
        },
        "browserFingerprint": browser_info.to_wire(),
    }


def encode_plaintext(payload: dict[str, Any]) -> bytes:
    """Encode *payload* as compact UTF-8 JSON.

    Raises:
        SerializationError: If a value is not JSON-serialisable or is a
            non-finite float.
    """
    try:
        text = json.dumps(payload, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
        return text.encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"Cannot encode plaintext payload: {exc}") from exc


def decode_plaintext(data: bytes) -> dict[str, Any]:
    """Inverse of :func:`encode_plaintext`.

    Raises:
        SerializationError: If *data* is not UTF-8 JSON describing an object.
    """
    try:
        payload = json.loads(data.decode("utf-8"))
    except ValueError as exc:
        raise SerializationError(f"Cannot decode plaintext payload: {exc}") from exc
    if not isinstance(payload, dict):
        raise SerializationError(
            f"Plaintext payload must be a JSON object, got {type(payload).__name__}"
        )
    return payload


class PayloadAssembler:
    """Turns a transaction's signals and device records into a sealed payload.

    Args:
        config: Supplies the key schedule constants and ``payload_method``.
        entropy: CSPRNG source for the IV.
        uniform: Statistical source for the state timeline jitter.
        cipher: AEAD cipher; a fresh :class:`AeadCipher` by default.
        clock: Monotonic millisecond clock for the state timeline base.
    """

    def __init__(
        self,
        config: SignalSealConfig,
        entropy: EntropySource,
        uniform: UniformSource,
        cipher: AeadCipher | None = None,
        clock: Callable[[], float] = monotonic_ms,
    ) -> None:
        self._config = config
        self._entropy = entropy
        self._uniform = uniform
        self._cipher = cipher or AeadCipher()
        self._clock = clock
        self._deriver = KeyDeriver(
            salt=config.hkdf_salt.encode("utf-8"),
            info=config.hkdf_info.encode("utf-8"),
        )

    def derive_key(self, context: TransactionContext) -> bytes:
        """Derive the transaction key for *context*."""
        return self._deriver.derive(build_ikm(context), self._config.key_length)

    def build(
        self,
        context: TransactionContext,
        signal_set: SignalSet,
        device_info: MediaDeviceInfo,
        browser_info: BrowserFingerprint,
        timeline: list[float] | None = None,
    ) -> SealedPayload:
        """Seal one transaction's payload.

        Args:
            context: Fresh transaction context (consumed for the key).
            signal_set: Generated signals.
            device_info: Media device record.
            browser_info: Browser fingerprint record.
            timeline: State timeline; generated from the uniform source when
                omitted.

        Returns:
            The sealed payload.

        Raises:
            SerializationError: If the plaintext cannot be encoded.
            DerivationLengthExceededError: If ``key_length`` is out of range.
            InvalidKeyMaterialError: If ``key_length`` is not 32.
            InvalidNonceLengthError: If ``iv_length`` is not 12.
        """
        if timeline is None:
            timeline = state_timeline(self._uniform, self._clock)
        plaintext = encode_plaintext(
            build_plaintext(
                context,
                signal_set,
                device_info,
                browser_info,
                timeline,
                method=self._config.payload_method,
            )
        )
        key = self.derive_key(context)
        iv = self._entropy.get_random_bytes(self._config.iv_length)
        return self._cipher.seal(key, iv, plaintext)

    def unseal(self, context: TransactionContext, sealed: SealedPayload) -> dict[str, Any]:
        """Re-derive the key for *context* and decode *sealed*.

        Raises:
            AuthenticationFailedError: If the payload was altered or belongs
                to a different context.
            SerializationError: If the decrypted bytes are not a JSON object.
        """
        key = self.derive_key(context)
        return decode_plaintext(self._cipher.open(key, sealed))
