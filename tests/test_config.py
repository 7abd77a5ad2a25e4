"""Tests for signal_seal.config.

Covers:
- Default values
- Environment variable loading (SEAL_* prefix)
- resolve_config merge logic and identity short-circuit
- Override validation (unknown keys, infrastructure keys, bad values)
"""

from __future__ import annotations

import pytest

from signal_seal.config import (
    _PER_CALL_FIELDS,
    SignalSealConfig,
    resolve_config,
    validate_overrides,
)
from signal_seal.exceptions import ConfigValidationError


class TestDefaults:
    """Verify default field values."""

    def test_signal_defaults(self, default_config: SignalSealConfig) -> None:
        assert default_config.sample_count == 64
        assert default_config.raw_center == 127.0
        assert default_config.raw_scale == 40.0
        assert default_config.sigmoid_scale == 20.0

    def test_outlier_defaults(self, default_config: SignalSealConfig) -> None:
        assert default_config.outlier_threshold == 3.0
        assert default_config.primary_passes == 1
        assert default_config.output_passes == 2

    def test_key_schedule_defaults(self, default_config: SignalSealConfig) -> None:
        assert default_config.hkdf_salt == "age-verify-salt-v2"
        assert default_config.hkdf_info == "age-verify-context"
        assert default_config.key_length == 32
        assert default_config.iv_length == 12
        assert "nonce_length" not in SignalSealConfig.model_fields

    def test_source_defaults(self, default_config: SignalSealConfig) -> None:
        assert default_config.entropy_source_type == "system"
        assert default_config.uniform_source_type == "numpy"
        assert default_config.uniform_seed is None

    def test_wire_defaults(self, default_config: SignalSealConfig) -> None:
        assert default_config.payload_method == 3
        assert default_config.verify_url == "/age-verification/verify"

    def test_logging_defaults(self, default_config: SignalSealConfig) -> None:
        assert default_config.log_level == "summary"
        assert default_config.diagnostic_mode is False


class TestEnvironmentLoading:
    """SEAL_* environment variables feed the config."""

    def test_env_overrides_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SEAL_SAMPLE_COUNT", "128")
        monkeypatch.setenv("SEAL_LOG_LEVEL", "full")
        cfg = SignalSealConfig(_env_file=None)  # type: ignore[call-arg]
        assert cfg.sample_count == 128
        assert cfg.log_level == "full"

    def test_env_seed(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SEAL_UNIFORM_SEED", "7")
        cfg = SignalSealConfig(_env_file=None)  # type: ignore[call-arg]
        assert cfg.uniform_seed == 7

    def test_init_kwargs_beat_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SEAL_SAMPLE_COUNT", "128")
        cfg = SignalSealConfig(_env_file=None, sample_count=16)  # type: ignore[call-arg]
        assert cfg.sample_count == 16


class TestResolveConfig:
    """Per-call override merging."""

    def test_none_returns_defaults(self, default_config: SignalSealConfig) -> None:
        assert resolve_config(default_config, None) is default_config

    def test_empty_returns_defaults(self, default_config: SignalSealConfig) -> None:
        assert resolve_config(default_config, {}) is default_config

    def test_unprefixed_keys_ignored(self, default_config: SignalSealConfig) -> None:
        assert resolve_config(default_config, {"sample_count": 5}) is default_config

    def test_override_applied(self, default_config: SignalSealConfig) -> None:
        cfg = resolve_config(default_config, {"seal_sample_count": 10, "seal_output_passes": 3})
        assert cfg.sample_count == 10
        assert cfg.output_passes == 3
        # Defaults untouched.
        assert default_config.sample_count == 64

    def test_string_values_coerced(self, default_config: SignalSealConfig) -> None:
        cfg = resolve_config(default_config, {"seal_sample_count": "12"})
        assert cfg.sample_count == 12

    def test_invalid_value_raises(self, default_config: SignalSealConfig) -> None:
        with pytest.raises(ConfigValidationError, match="Invalid config override"):
            resolve_config(default_config, {"seal_sample_count": "many"})

    def test_constraint_violation_raises(self, default_config: SignalSealConfig) -> None:
        with pytest.raises(ConfigValidationError):
            resolve_config(default_config, {"seal_sigmoid_scale": 0})


class TestValidateOverrides:
    """Override key validation."""

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ConfigValidationError, match="Unknown config field"):
            validate_overrides({"seal_no_such_field": 1})

    @pytest.mark.parametrize("field", ["hkdf_salt", "hkdf_info", "key_length", "entropy_source_type"])
    def test_infrastructure_field_rejected(self, field: str) -> None:
        with pytest.raises(ConfigValidationError, match="infrastructure"):
            validate_overrides({f"seal_{field}": "x"})

    def test_per_call_fields_accepted(self) -> None:
        validate_overrides({f"seal_{name}": None for name in _PER_CALL_FIELDS})

    def test_key_schedule_never_per_call(self) -> None:
        assert not {"hkdf_salt", "hkdf_info", "key_length", "iv_length"} & _PER_CALL_FIELDS

    def test_nonce_length_is_not_a_field(self) -> None:
        with pytest.raises(ConfigValidationError, match="Unknown config field"):
            validate_overrides({"seal_nonce_length": 24})
