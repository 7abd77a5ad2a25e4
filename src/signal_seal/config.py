"""Configuration system for signal-seal.

Uses pydantic-settings for declarative, layered configuration:
init kwargs -> environment variables (SEAL_*) -> .env file -> field defaults.

Per-call overrides are applied via resolve_config() which creates a new
config instance without mutating the defaults. Infrastructure fields (key
derivation constants, source selection, wire constants) are protected from
per-call override.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from signal_seal.exceptions import ConfigValidationError

# Fields that can be overridden per call. Everything that feeds the key
# schedule or the wire envelope is excluded.
_PER_CALL_FIELDS: frozenset[str] = frozenset(
    {
        "sample_count",
        "raw_center",
        "raw_scale",
        "sigmoid_scale",
        "outlier_threshold",
        "primary_passes",
        "output_passes",
        "log_level",
        "diagnostic_mode",
    }
)

_OVERRIDE_PREFIX = "seal_"

# All known config field names (populated after class definition).
_ALL_FIELDS: frozenset[str] = frozenset()


class SignalSealConfig(BaseSettings):
    """Configuration for signal-seal.

    Resolution order: init kwargs -> env vars (SEAL_*) -> .env file -> defaults.

    Fields are divided into two groups:
    - **Infrastructure**: Source selection, key schedule, wire constants.
      NOT overridable per call.
    - **Signal parameters**: Generator shape, outlier filtering, logging.
      Overridable per call via ``seal_``-prefixed keys.
    """

    model_config = SettingsConfigDict(
        env_prefix="SEAL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Randomness (NOT per-call overridable) ---

    entropy_source_type: str = Field(
        default="system",
        description="Cryptographic source for nonces, IVs and transaction ids",
    )
    uniform_source_type: str = Field(
        default="numpy",
        description="Statistical uniform source driving the Gaussian sampler",
    )
    uniform_seed: int | None = Field(
        default=None,
        description="Seed for the statistical uniform source (None = fresh OS seed)",
    )

    # --- Key schedule (NOT per-call overridable) ---

    hkdf_salt: str = Field(
        default="age-verify-salt-v2",
        description="HKDF salt (UTF-8 encoded before use)",
    )
    hkdf_info: str = Field(
        default="age-verify-context",
        description="HKDF context string (UTF-8 encoded before use)",
    )
    key_length: int = Field(
        default=32,
        description="Derived key length in bytes (AES-256)",
    )
    iv_length: int = Field(
        default=12,
        description="AES-GCM IV length in bytes",
    )

    # --- Wire envelope (NOT per-call overridable) ---

    payload_method: int = Field(
        default=3,
        description="Discriminator written to the plaintext 'method' field",
    )
    verify_url: str = Field(
        default="/age-verification/verify",
        description="Path posted to by the transport client",
    )

    # --- Signal generation (per-call overridable) ---

    sample_count: int = Field(
        default=64,
        ge=0,
        description="Number of raw readings per transaction",
    )
    raw_center: float = Field(
        default=127.0,
        description="Mean of the raw reading distribution",
    )
    raw_scale: float = Field(
        default=40.0,
        description="Standard deviation of the raw reading distribution",
    )
    sigmoid_scale: float = Field(
        default=20.0,
        gt=0.0,
        description="Divisor applied to (raw - center) before the sigmoid",
    )

    # --- Outlier rejection (per-call overridable) ---

    outlier_threshold: float = Field(
        default=3.0,
        description="Values farther than this many standard deviations are dropped",
    )
    primary_passes: int = Field(
        default=1,
        ge=0,
        description="Rejection passes for the primaryOutputs view",
    )
    output_passes: int = Field(
        default=2,
        ge=0,
        description="Rejection passes for the outputs view",
    )

    # --- Logging (per-call overridable) ---

    log_level: str = Field(
        default="summary",
        description="Logging verbosity: 'none', 'summary', 'full'",
    )
    diagnostic_mode: bool = Field(
        default=False,
        description="Store all transaction records in memory for analysis",
    )


# Populate _ALL_FIELDS now that the class is defined.
_ALL_FIELDS = frozenset(SignalSealConfig.model_fields.keys())


def _strip_prefix(key: str) -> str:
    """Strip the 'seal_' prefix from an override key."""
    if key.startswith(_OVERRIDE_PREFIX):
        return key[len(_OVERRIDE_PREFIX) :]
    return key


def validate_overrides(overrides: dict[str, Any]) -> None:
    """Validate all seal_* keys in *overrides* without creating a config.

    Args:
        overrides: Dictionary of per-call overrides, potentially with
            ``seal_`` prefix.

    Raises:
        ConfigValidationError: If any seal_* key is unknown or non-overridable.
    """
    for key in overrides:
        if not key.startswith(_OVERRIDE_PREFIX):
            continue
        field_name = _strip_prefix(key)
        if field_name not in _ALL_FIELDS:
            raise ConfigValidationError(
                f"Unknown config field: '{key}' (no field '{field_name}' exists)"
            )
        if field_name not in _PER_CALL_FIELDS:
            raise ConfigValidationError(
                f"Field '{field_name}' is an infrastructure field and cannot be "
                f"overridden per call"
            )


def resolve_config(
    defaults: SignalSealConfig,
    overrides: dict[str, Any] | None,
) -> SignalSealConfig:
    """Create a new config instance merging defaults with per-call overrides.

    Override keys use the 'seal_' prefix (e.g., ``'seal_sample_count': 128``).
    Keys without the prefix are silently ignored.

    Args:
        defaults: The base configuration loaded from environment.
        overrides: Per-call overrides.

    Returns:
        A new SignalSealConfig with overrides applied, or *defaults* itself
        when nothing applies.

    Raises:
        ConfigValidationError: If any seal_* key is unknown, non-overridable,
            or carries a value that fails validation.
    """
    if not overrides:
        return defaults

    validate_overrides(overrides)

    updates: dict[str, Any] = {
        _strip_prefix(key): value
        for key, value in overrides.items()
        if key.startswith(_OVERRIDE_PREFIX)
    }
    if not updates:
        return defaults

    # model_copy(update=...) skips validation; model_validate coerces types
    # and enforces field constraints.
    merged = defaults.model_dump()
    merged.update(updates)
    try:
        return SignalSealConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigValidationError(f"Invalid config override: {exc}") from exc
