"""Payload records and the sealing assembler."""

from signal_seal.crypto.aead import SealedPayload
from signal_seal.payload.assembler import (
    PayloadAssembler,
    build_ikm,
    build_plaintext,
    decode_plaintext,
    encode_plaintext,
)
from signal_seal.payload.types import (
    BrowserFingerprint,
    MediaDeviceInfo,
    TransactionContext,
)

__all__ = [
    "BrowserFingerprint",
    "MediaDeviceInfo",
    "PayloadAssembler",
    "SealedPayload",
    "TransactionContext",
    "build_ikm",
    "build_plaintext",
    "decode_plaintext",
    "encode_plaintext",
]
