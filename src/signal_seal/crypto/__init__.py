"""Key derivation and authenticated encryption for signal-seal."""

from signal_seal.crypto.aead import AeadCipher, SealedPayload
from signal_seal.crypto.kdf import KeyDeriver, hkdf_expand, hkdf_extract, hkdf_sha256

__all__ = [
    "AeadCipher",
    "KeyDeriver",
    "SealedPayload",
    "hkdf_expand",
    "hkdf_extract",
    "hkdf_sha256",
]
