"""AES-256-GCM authenticated encryption.

Thin wrapper around ``cryptography``'s ``AESGCM`` that enforces the key and
IV lengths up front, splits the combined output into ciphertext and tag,
and converts ``InvalidTag`` into the package's own error type.
"""

from __future__ import annotations

from dataclasses import dataclass

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from signal_seal.exceptions import (
    AuthenticationFailedError,
    InvalidKeyMaterialError,
    InvalidNonceLengthError,
)

KEY_LENGTH = 32
IV_LENGTH = 12
TAG_LENGTH = 16


@dataclass(frozen=True, slots=True)
class SealedPayload:
    """Encrypted payload ready for transport encoding.

    Attributes:
        ciphertext: Encrypted bytes, same length as the plaintext.
        auth_tag: 16-byte GCM tag (the last 16 bytes of the combined output).
        iv: 12-byte IV used for this encryption.
    """

    ciphertext: bytes
    auth_tag: bytes
    iv: bytes


def _check_key(key: bytes) -> None:
    if len(key) != KEY_LENGTH:
        raise InvalidKeyMaterialError(
            f"AES-256 key must be {KEY_LENGTH} bytes, got {len(key)}"
        )


def _check_iv(iv: bytes) -> None:
    if len(iv) != IV_LENGTH:
        raise InvalidNonceLengthError(
            f"AES-GCM IV must be {IV_LENGTH} bytes, got {len(iv)}"
        )


class AeadCipher:
    """AES-256-GCM with a 128-bit tag and no associated data.

    Stateless: the key is passed on every call and never stored. Callers
    must not reuse an IV under the same key.
    """

    def encrypt(self, key: bytes, iv: bytes, plaintext: bytes) -> tuple[bytes, bytes]:
        """Encrypt *plaintext*.

        Returns:
            ``(ciphertext, auth_tag)``.

        Raises:
            InvalidKeyMaterialError: If *key* is not 32 bytes.
            InvalidNonceLengthError: If *iv* is not 12 bytes.
        """
        _check_key(key)
        _check_iv(iv)
        combined = AESGCM(key).encrypt(iv, plaintext, None)
        return combined[:-TAG_LENGTH], combined[-TAG_LENGTH:]

    def decrypt(self, key: bytes, iv: bytes, ciphertext: bytes, auth_tag: bytes) -> bytes:
        """Verify *auth_tag* and decrypt *ciphertext*.

        Raises:
            InvalidKeyMaterialError: If *key* is not 32 bytes.
            InvalidNonceLengthError: If *iv* is not 12 bytes.
            AuthenticationFailedError: If the tag is malformed or does not
                verify.
        """
        _check_key(key)
        _check_iv(iv)
        if len(auth_tag) != TAG_LENGTH:
            raise AuthenticationFailedError(
                f"Authentication tag must be {TAG_LENGTH} bytes, got {len(auth_tag)}"
            )
        try:
            return AESGCM(key).decrypt(iv, ciphertext + auth_tag, None)
        except InvalidTag as exc:
            raise AuthenticationFailedError("Authentication tag did not verify") from exc

    def seal(self, key: bytes, iv: bytes, plaintext: bytes) -> SealedPayload:
        """Encrypt *plaintext* and bundle the result with its IV."""
        ciphertext, auth_tag = self.encrypt(key, iv, plaintext)
        return SealedPayload(ciphertext=ciphertext, auth_tag=auth_tag, iv=iv)

    def open(self, key: bytes, sealed: SealedPayload) -> bytes:
        """Decrypt a :class:`SealedPayload` produced by :meth:`seal`."""
        return self.decrypt(key, sealed.iv, sealed.ciphertext, sealed.auth_tag)
