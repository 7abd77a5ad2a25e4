"""Transport adapter: request body encoding and the injected client call.

The network client is supplied by the caller; this module never constructs
one. Any exception the client raises is wrapped in
:class:`~signal_seal.exceptions.TransportError` with the original chained.
"""

from __future__ import annotations

import base64
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol

from signal_seal.exceptions import TransportError

if TYPE_CHECKING:
    from signal_seal.crypto.aead import SealedPayload
    from signal_seal.payload.types import TransactionContext

logger = logging.getLogger("signal_seal")


class TransportClient(Protocol):
    """Anything with a ``post(url=..., body=...)`` method."""

    def post(self, *, url: str, body: dict[str, Any]) -> Any: ...


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def build_request_body(sealed: SealedPayload, context: TransactionContext) -> dict[str, Any]:
    """Return the JSON body for the verification request.

    Binary fields are standard base64 text; ``timestamp`` is in whole
    seconds.
    """
    return {
        "encrypted_payload": _b64(sealed.ciphertext),
        "auth_tag": _b64(sealed.auth_tag),
        "iv": _b64(sealed.iv),
        "timestamp": context.timestamp_seconds,
        "transaction_id": context.transaction_id,
    }


def _field(obj: Any, name: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def extract_redirect_url(response: Any) -> str | None:
    """Return ``response.body.verification_webview_url`` if present.

    Accepts attribute-style responses and plain mappings alike.
    """
    body = _field(response, "body")
    if body is None:
        return None
    url = _field(body, "verification_webview_url")
    return url or None


def submit(
    client: TransportClient,
    sealed: SealedPayload,
    context: TransactionContext,
    url: str,
) -> str | None:
    """Post the sealed payload and return the verification URL, if any.

    Raises:
        TransportError: If the client raises. No retry is attempted.
    """
    body = build_request_body(sealed, context)
    try:
        response = client.post(url=url, body=body)
    except Exception as exc:
        raise TransportError(f"Transport request to {url} failed: {exc}") from exc

    redirect = extract_redirect_url(response)
    logger.debug(
        "transport: transaction=%s redirect=%s",
        context.transaction_id,
        "yes" if redirect else "no",
    )
    return redirect
