"""Sealing pipeline: the integration layer for signal-seal.

Orchestrates one transaction end to end:
    context -> signals -> plaintext -> HKDF key -> AES-GCM seal -> (transport).

Every :meth:`SealingPipeline.run` call creates its own transaction context,
key and IV. The pipeline object holds configuration and stateless helpers
only, so one instance can serve concurrent calls from several threads.
"""

from __future__ import annotations

import hashlib
import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from signal_seal.config import SignalSealConfig, resolve_config
from signal_seal.entropy.registry import EntropySourceRegistry
from signal_seal.logging.logger import PipelineLogger
from signal_seal.logging.types import SealRecord
from signal_seal.payload.assembler import PayloadAssembler
from signal_seal.payload.types import MediaDeviceInfo, TransactionContext, wall_clock_ms
from signal_seal.sampling.gaussian import GaussianSampler
from signal_seal.sampling.uniform import UniformSourceRegistry
from signal_seal.signals.generator import SyntheticSignalGenerator
from signal_seal.signals.telemetry import monotonic_ms
from signal_seal.transport import build_request_body, submit

if TYPE_CHECKING:
    from collections.abc import Callable

    from signal_seal.crypto.aead import SealedPayload
    from signal_seal.entropy.base import EntropySource
    from signal_seal.payload.types import BrowserFingerprint
    from signal_seal.sampling.uniform import UniformSource
    from signal_seal.signals.types import SignalSet
    from signal_seal.transport import TransportClient

logger = logging.getLogger("signal_seal")


def _config_hash(config: SignalSealConfig) -> str:
    """First 16 hex characters of the SHA-256 of the config dump."""
    raw = config.model_dump_json().encode("utf-8")
    return hashlib.sha256(raw).hexdigest()[:16]


def _elapsed_ms(start_ns: int) -> float:
    return (time.perf_counter_ns() - start_ns) / 1_000_000.0


@dataclass(frozen=True, slots=True)
class SealResult:
    """Outcome of one pipeline call.

    Attributes:
        context: The transaction context the key was derived from.
        sealed: Ciphertext, tag and IV.
        signal_set: The signals embedded in the plaintext.
        request_body: Transport body (base64 fields, seconds timestamp).
        redirect_url: ``verification_webview_url`` from the transport
            response, or ``None`` when absent or no client was given.
    """

    context: TransactionContext
    sealed: SealedPayload
    signal_set: SignalSet
    request_body: dict[str, Any]
    redirect_url: str | None = None


class SealingPipeline:
    """Builds and seals synthetic-signal payloads.

    Args:
        config: Default configuration; loaded from the environment when
            omitted.
        entropy: CSPRNG source; built from ``config.entropy_source_type``
            when omitted.
        uniform: Statistical source shared by every call. When omitted, each
            call builds its own from ``config.uniform_source_type`` and
            ``config.uniform_seed``, so concurrent calls share no generator
            state. An injected source must be safe for the caller's
            threading model.
        transport: Optional client; when given, every call submits its
            payload to ``config.verify_url``.
        wall_clock: Epoch-milliseconds clock for transaction timestamps.
        monotonic_clock: Millisecond clock for the state timeline base.
    """

    def __init__(
        self,
        config: SignalSealConfig | None = None,
        entropy: EntropySource | None = None,
        uniform: UniformSource | None = None,
        transport: TransportClient | None = None,
        wall_clock: Callable[[], int] = wall_clock_ms,
        monotonic_clock: Callable[[], float] = monotonic_ms,
    ) -> None:
        self._default_config = config if config is not None else SignalSealConfig()
        self._entropy = entropy or EntropySourceRegistry.build(
            self._default_config.entropy_source_type
        )
        self._uniform = uniform
        self._transport = transport
        self._wall_clock = wall_clock
        self._monotonic_clock = monotonic_clock
        self._logger = PipelineLogger(self._default_config)
        self._default_config_hash = _config_hash(self._default_config)

        logger.info(
            "SealingPipeline initialized: entropy_source=%s, uniform_source=%s, "
            "sample_count=%d, transport=%s",
            self._entropy.name,
            uniform.name if uniform is not None else self._default_config.uniform_source_type,
            self._default_config.sample_count,
            "yes" if transport is not None else "no",
        )

    def _uniform_for_call(self, config: SignalSealConfig) -> UniformSource:
        if self._uniform is not None:
            return self._uniform
        return UniformSourceRegistry.build(config.uniform_source_type, seed=config.uniform_seed)

    def run(
        self,
        browser_info: BrowserFingerprint,
        device_info: MediaDeviceInfo | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> SealResult:
        """Run one transaction.

        Args:
            browser_info: Browser fingerprint to embed.
            device_info: Media device record; defaults apply when omitted.
            overrides: Per-call ``seal_``-prefixed config overrides.

        Returns:
            The sealed payload with its context and transport body.

        Raises:
            SignalSealError: Any subclass, unchanged, after being logged.
                Failures from outside the package, such as a plugin source
                returning short bytes, are logged and re-raised the same
                way. Nothing is retried and no partial result is returned.
        """
        t_start_ns = time.perf_counter_ns()
        config = resolve_config(self._default_config, overrides)
        hash_str = (
            self._default_config_hash if config is self._default_config else _config_hash(config)
        )
        if device_info is None:
            device_info = MediaDeviceInfo()

        context: TransactionContext | None = None
        try:
            context = TransactionContext.create(self._entropy, self._wall_clock)
            uniform = self._uniform_for_call(config)

            # --- 1. Generate signals ---
            t_gen_ns = time.perf_counter_ns()
            generator = SyntheticSignalGenerator(GaussianSampler(uniform), config)
            signal_set = generator.generate()
            generate_ms = _elapsed_ms(t_gen_ns)

            # --- 2. Encode, derive, encrypt ---
            t_seal_ns = time.perf_counter_ns()
            assembler = PayloadAssembler(
                config, self._entropy, uniform, clock=self._monotonic_clock
            )
            sealed = assembler.build(context, signal_set, device_info, browser_info)
            seal_ms = _elapsed_ms(t_seal_ns)

            # --- 3. Hand off to transport ---
            request_body = build_request_body(sealed, context)
            redirect_url = None
            if self._transport is not None:
                redirect_url = submit(self._transport, sealed, context, config.verify_url)
        except Exception:  # Logged once here, then re-raised unchanged.
            logger.error(
                "Sealing failed for transaction=%s",
                context.transaction_id if context is not None else "(none)",
                exc_info=True,
            )
            raise

        self._logger.log_seal(
            SealRecord(
                timestamp_ms=context.timestamp_ms,
                transaction_id=context.transaction_id,
                entropy_source=self._entropy.name,
                raw_count=len(signal_set.raw_readings),
                primary_count=len(signal_set.primary_outputs),
                output_count=len(signal_set.outputs),
                raw_mean=signal_set.raw_mean,
                plaintext_bytes=len(sealed.ciphertext),
                generate_ms=generate_ms,
                seal_ms=seal_ms,
                total_ms=_elapsed_ms(t_start_ns),
                submitted=self._transport is not None,
                config_hash=hash_str,
            ),
            config,
        )

        return SealResult(
            context=context,
            sealed=sealed,
            signal_set=signal_set,
            request_body=request_body,
            redirect_url=redirect_url,
        )

    def unseal(self, result: SealResult) -> dict[str, Any]:
        """Decrypt and decode a result produced by :meth:`run`.

        The key is re-derived from ``result.context``; nothing from the
        original call was kept.
        """
        assembler = PayloadAssembler(
            self._default_config,
            self._entropy,
            self._uniform_for_call(self._default_config),
        )
        return assembler.unseal(result.context, result.sealed)

    @property
    def entropy_source(self) -> EntropySource:
        """The active CSPRNG source."""
        return self._entropy

    @property
    def default_config(self) -> SignalSealConfig:
        """The default configuration."""
        return self._default_config

    @property
    def pipeline_logger(self) -> PipelineLogger:
        """The diagnostic logger for this pipeline."""
        return self._logger

    def close(self) -> None:
        """Release resources held by the entropy source."""
        self._entropy.close()


def seal_payload(
    browser_info: BrowserFingerprint,
    device_info: MediaDeviceInfo | None = None,
    transport: TransportClient | None = None,
    config: SignalSealConfig | None = None,
) -> SealResult:
    """One-shot helper: build a pipeline, run one transaction, close it."""
    pipeline = SealingPipeline(config=config, transport=transport)
    try:
        return pipeline.run(browser_info, device_info)
    finally:
        pipeline.close()
