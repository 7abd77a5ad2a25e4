"""Data types for the diagnostic logging subsystem."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SealRecord:
    """Immutable record of one sealing call.

    Holds sizes, counts and timings only. Key material, nonces, IVs and
    plaintext never appear here.

    Attributes:
        timestamp_ms: Transaction timestamp (milliseconds since epoch).
        transaction_id: Transaction identifier.
        entropy_source: Name of the CSPRNG source used.
        raw_count: Number of raw readings generated.
        primary_count: Readings surviving the primary rejection passes.
        output_count: Readings surviving the full rejection passes.
        raw_mean: Mean of the raw readings.
        plaintext_bytes: Encoded plaintext size (equals ciphertext size).
        generate_ms: Time spent generating signals (ms).
        seal_ms: Time spent encoding, deriving and encrypting (ms).
        total_ms: Wall time of the whole call (ms).
        submitted: Whether the payload was handed to a transport client.
        config_hash: 16-char SHA-256 prefix of the active config.
    """

    # Transaction
    timestamp_ms: int
    transaction_id: str
    entropy_source: str

    # Signals
    raw_count: int
    primary_count: int
    output_count: int
    raw_mean: float

    # Sealing
    plaintext_bytes: int

    # Timing
    generate_ms: float
    seal_ms: float
    total_ms: float

    submitted: bool
    config_hash: str
