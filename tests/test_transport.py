"""Tests for the transport adapter."""

from __future__ import annotations

import base64
import logging
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from signal_seal.crypto.aead import SealedPayload
from signal_seal.exceptions import SignalSealError, TransportError
from signal_seal.payload.types import TransactionContext
from signal_seal.transport import build_request_body, extract_redirect_url, submit

SEALED = SealedPayload(ciphertext=b"\x00\x01\x02\xff", auth_tag=bytes(16), iv=b"\xaa" * 12)


class TestBuildRequestBody:
    def test_fields(self, context: TransactionContext) -> None:
        body = build_request_body(SEALED, context)
        assert set(body) == {"encrypted_payload", "auth_tag", "iv", "timestamp", "transaction_id"}
        assert body["encrypted_payload"] == "AAEC/w=="
        assert body["auth_tag"] == base64.b64encode(bytes(16)).decode()
        assert base64.b64decode(body["iv"]) == b"\xaa" * 12
        assert body["transaction_id"] == context.transaction_id

    def test_timestamp_in_seconds(self, context: TransactionContext) -> None:
        assert build_request_body(SEALED, context)["timestamp"] == 1_700_000_000


class TestExtractRedirectUrl:
    def test_mapping(self) -> None:
        response = {"body": {"verification_webview_url": "https://example.test/v"}}
        assert extract_redirect_url(response) == "https://example.test/v"

    def test_attributes(self) -> None:
        response = SimpleNamespace(body=SimpleNamespace(verification_webview_url="https://x.test"))
        assert extract_redirect_url(response) == "https://x.test"

    @pytest.mark.parametrize(
        "response",
        [None, {}, {"body": None}, {"body": {}}, {"body": {"verification_webview_url": ""}}],
    )
    def test_absent(self, response: object) -> None:
        assert extract_redirect_url(response) is None


class TestSubmit:
    def test_posts_body_to_url(self, context: TransactionContext) -> None:
        client = MagicMock()
        client.post.return_value = {"body": {"verification_webview_url": "https://v.test"}}

        redirect = submit(client, SEALED, context, "/age-verification/verify")

        assert redirect == "https://v.test"
        client.post.assert_called_once_with(
            url="/age-verification/verify", body=build_request_body(SEALED, context)
        )

    def test_client_failure_wrapped(self, context: TransactionContext) -> None:
        client = MagicMock()
        cause = ConnectionError("connection reset")
        client.post.side_effect = cause

        with pytest.raises(TransportError, match="/verify") as excinfo:
            submit(client, SEALED, context, "/verify")

        assert excinfo.value.__cause__ is cause
        assert isinstance(excinfo.value, SignalSealError)
        client.post.assert_called_once()

    def test_debug_log(self, context: TransactionContext, caplog: pytest.LogCaptureFixture) -> None:
        client = MagicMock()
        client.post.return_value = None
        with caplog.at_level(logging.DEBUG, logger="signal_seal"):
            assert submit(client, SEALED, context, "/verify") is None
        assert "redirect=no" in caplog.text
