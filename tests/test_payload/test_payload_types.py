"""Tests for the payload records."""

from __future__ import annotations

import uuid

import pytest
from pydantic import ValidationError

from signal_seal.entropy.mock import MockEntropySource
from signal_seal.payload.types import BrowserFingerprint, MediaDeviceInfo, TransactionContext

_WIRE_KEYS = {
    "userAgent",
    "language",
    "platform",
    "screenWidth",
    "screenHeight",
    "colorDepth",
    "timezoneOffset",
    "cookiesEnabled",
    "webdriver",
    "hardwareConcurrency",
    "deviceMemory",
}


class TestBrowserFingerprint:
    def test_wire_keys(self, browser_info: BrowserFingerprint) -> None:
        assert set(browser_info.to_wire()) == _WIRE_KEYS

    def test_values_verbatim(self, browser_info: BrowserFingerprint) -> None:
        wire = browser_info.to_wire()
        assert wire["userAgent"].startswith("Mozilla/5.0")
        assert wire["screenWidth"] == 1512
        assert wire["timezoneOffset"] == -60
        assert wire["webdriver"] is False

    def test_defaults(self) -> None:
        fp = BrowserFingerprint(
            user_agent="ua",
            language="de-DE",
            platform="Linux x86_64",
            screen_width=1920,
            screen_height=1080,
            color_depth=24,
            timezone_offset=0,
            cookies_enabled=False,
            hardware_concurrency=4,
        )
        wire = fp.to_wire()
        assert wire["webdriver"] is None
        assert wire["deviceMemory"] == 4

    def test_frozen(self, browser_info: BrowserFingerprint) -> None:
        with pytest.raises(ValidationError):
            browser_info.language = "fr-FR"  # type: ignore[misc]

    def test_missing_field_rejected(self) -> None:
        with pytest.raises(ValidationError):
            BrowserFingerprint(userAgent="ua")  # type: ignore[call-arg]


class TestMediaDeviceInfo:
    def test_defaults(self) -> None:
        assert MediaDeviceInfo().to_wire() == {
            "deviceId": "default",
            "groupId": "",
            "kind": "videoinput",
            "label": "FaceTime HD Camera",
        }

    def test_from_devices_picks_first_video_input(self) -> None:
        devices = [
            {"kind": "audioinput", "deviceId": "mic", "groupId": "g0", "label": "Mic"},
            {"kind": "videoinput", "deviceId": "cam1", "groupId": "g1", "label": "USB Cam"},
            {"kind": "videoinput", "deviceId": "cam2", "groupId": "g2", "label": "Other"},
        ]
        info = MediaDeviceInfo.from_devices(devices)
        assert info.device_id == "cam1"
        assert info.group_id == "g1"
        assert info.label == "USB Cam"

    def test_empty_fields_fall_back(self) -> None:
        info = MediaDeviceInfo.from_devices(
            [{"kind": "videoinput", "deviceId": "", "groupId": "g", "label": ""}]
        )
        assert info.device_id == "default"
        assert info.group_id == "g"
        assert info.label == "FaceTime HD Camera"

    def test_no_video_input(self) -> None:
        info = MediaDeviceInfo.from_devices([{"kind": "audiooutput", "deviceId": "spk"}])
        assert info == MediaDeviceInfo()

    def test_empty_list(self) -> None:
        assert MediaDeviceInfo.from_devices([]) == MediaDeviceInfo()

    def test_kind_is_fixed(self) -> None:
        with pytest.raises(ValidationError):
            MediaDeviceInfo(kind="audioinput")  # type: ignore[arg-type]


class TestTransactionContext:
    def test_create(self) -> None:
        ctx = TransactionContext.create(MockEntropySource(seed=1), clock=lambda: 1_700_000_000_999)
        assert ctx.timestamp_ms == 1_700_000_000_999
        assert ctx.timestamp_seconds == 1_700_000_000
        assert len(ctx.nonce) == 16
        assert uuid.UUID(ctx.transaction_id).version == 4

    def test_create_is_fresh_each_call(self) -> None:
        source = MockEntropySource(seed=1)
        a = TransactionContext.create(source)
        b = TransactionContext.create(source)
        assert a.nonce != b.nonce
        assert a.transaction_id != b.transaction_id

    def test_default_clock_is_epoch_ms(self) -> None:
        ctx = TransactionContext.create(MockEntropySource(seed=1))
        # Sometime after 2020 and expressed in milliseconds.
        assert ctx.timestamp_ms > 1_577_836_800_000

    def test_bad_nonce_length(self) -> None:
        with pytest.raises(ValueError, match="nonce"):
            TransactionContext(str(uuid.uuid4()), 0, b"short")

    def test_negative_timestamp(self) -> None:
        with pytest.raises(ValueError, match="timestamp"):
            TransactionContext(str(uuid.uuid4()), -1, bytes(16))

    def test_malformed_transaction_id(self) -> None:
        with pytest.raises(ValueError):
            TransactionContext("not-a-uuid", 0, bytes(16))

    def test_frozen(self, context: TransactionContext) -> None:
        with pytest.raises(AttributeError):
            context.nonce = bytes(16)  # type: ignore[misc]
