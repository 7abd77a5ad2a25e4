"""HKDF-SHA256 key derivation (RFC 5869 extract-then-expand).

Built directly on :mod:`hmac` so the block counter limit surfaces as a
typed :class:`~signal_seal.exceptions.DerivationLengthExceededError`.
Output is byte-identical to ``cryptography``'s ``HKDF`` for the same inputs.
"""

from __future__ import annotations

import hashlib
import hmac

from signal_seal.exceptions import DerivationLengthExceededError

HASH_LEN = hashlib.sha256().digest_size
MAX_BLOCKS = 255
MAX_LENGTH = MAX_BLOCKS * HASH_LEN


def hkdf_extract(salt: bytes, ikm: bytes) -> bytes:
    """Return the pseudorandom key ``HMAC-SHA256(key=salt, msg=ikm)``."""
    return hmac.new(salt, ikm, hashlib.sha256).digest()


def hkdf_expand(prk: bytes, info: bytes, length: int) -> bytes:
    """Expand *prk* into *length* bytes bound to *info*.

    ``T(i) = HMAC(prk, T(i-1) || info || i)`` with a one-byte counter
    starting at 1 and ``T(0)`` empty.

    Raises:
        DerivationLengthExceededError: If *length* is negative or needs more
            than 255 blocks.
    """
    if length < 0 or length > MAX_LENGTH:
        raise DerivationLengthExceededError(
            f"Cannot derive {length} bytes: HKDF-SHA256 output is limited to "
            f"0..{MAX_LENGTH} bytes ({MAX_BLOCKS} blocks of {HASH_LEN})"
        )

    blocks = -(-length // HASH_LEN)
    okm = bytearray()
    t = b""
    for counter in range(1, blocks + 1):
        t = hmac.new(prk, t + info + bytes([counter]), hashlib.sha256).digest()
        okm += t
    return bytes(okm[:length])


def hkdf_sha256(ikm: bytes, salt: bytes, info: bytes, length: int) -> bytes:
    """Derive *length* bytes from (*ikm*, *salt*, *info*).

    Deterministic: identical inputs always give identical output.

    Raises:
        DerivationLengthExceededError: See :func:`hkdf_expand`.
    """
    return hkdf_expand(hkdf_extract(salt, ikm), info, length)


class KeyDeriver:
    """HKDF-SHA256 bound to a fixed salt and context string.

    Holds only the two constants; the derived key is returned to the caller
    and never kept.

    Args:
        salt: HKDF salt.
        info: HKDF context string.
    """

    __slots__ = ("_info", "_salt")

    def __init__(self, salt: bytes, info: bytes) -> None:
        self._salt = salt
        self._info = info

    @property
    def salt(self) -> bytes:
        return self._salt

    @property
    def info(self) -> bytes:
        return self._info

    def derive(self, ikm: bytes, length: int = HASH_LEN) -> bytes:
        """Derive *length* bytes of key material from *ikm*."""
        return hkdf_sha256(ikm, self._salt, self._info, length)
