"""Exception hierarchy for signal-seal.

All exceptions derive from SignalSealError, enabling broad catch patterns
at the application boundary while allowing fine-grained handling internally.
None of these are retried: every error propagates to the caller as soon as
it is raised.
"""


class SignalSealError(Exception):
    """Base exception for all signal-seal errors."""


class EntropyUnavailableError(SignalSealError):
    """The cryptographic entropy source cannot provide bytes."""


class ConfigValidationError(SignalSealError):
    """Configuration field validation failed.

    Raised when per-call overrides contain unknown keys, attempt to
    override infrastructure fields, or fail type validation.
    """


class CryptoError(SignalSealError):
    """Base class for key-derivation and cipher failures."""


class InvalidKeyMaterialError(CryptoError):
    """Cipher key has the wrong length (AES-256 requires exactly 32 bytes)."""


class InvalidNonceLengthError(CryptoError):
    """Cipher IV has the wrong length (GCM here requires exactly 12 bytes)."""


class DerivationLengthExceededError(CryptoError):
    """Requested HKDF output needs more than 255 expand blocks."""


class AuthenticationFailedError(CryptoError):
    """Authentication tag did not verify on decrypt.

    Raised when the ciphertext, tag, key or IV was altered.
    """


class SerializationError(SignalSealError):
    """The plaintext payload could not be encoded or decoded."""


class TransportError(SignalSealError):
    """The injected transport client failed.

    The client's own exception is chained as ``__cause__``.
    """
