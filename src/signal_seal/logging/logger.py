"""Diagnostic logger for per-transaction sealing events.

Uses the standard ``logging`` module with the ``"signal_seal"`` logger.
No ``print()`` statements.
"""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import asdict
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from signal_seal.config import SignalSealConfig
    from signal_seal.logging.types import SealRecord

logger = logging.getLogger("signal_seal")


class PipelineLogger:
    """Per-transaction diagnostic logger.

    Log levels:
        ``"none"``: No output. Records are still stored if
        ``diagnostic_mode=True``.

        ``"summary"``: One line per transaction.

        ``"full"``: JSON dump of every record field.

    Diagnostic mode keeps records in memory for ``get_diagnostic_data()``
    and ``get_summary_stats()``. Appends are lock-protected so one logger
    can serve concurrent pipeline calls.
    """

    def __init__(self, config: SignalSealConfig) -> None:
        self._log_level = config.log_level
        self._diagnostic_mode = config.diagnostic_mode
        self._records: list[SealRecord] = []
        self._lock = threading.Lock()

    def log_seal(self, record: SealRecord, config: SignalSealConfig | None = None) -> None:
        """Log one sealing event.

        Args:
            record: Immutable record of the call.
            config: Per-call config whose ``log_level`` and
                ``diagnostic_mode`` take precedence, if given.
        """
        log_level = config.log_level if config is not None else self._log_level
        diagnostic = config.diagnostic_mode if config is not None else self._diagnostic_mode

        if diagnostic:
            with self._lock:
                self._records.append(record)

        if log_level == "none":
            return

        if log_level == "summary":
            logger.info(
                "transaction=%s raws=%d primary=%d outputs=%d raw_mean=%.2f "
                "bytes=%d source=%s%s gen=%.2fms seal=%.2fms total=%.2fms",
                record.transaction_id,
                record.raw_count,
                record.primary_count,
                record.output_count,
                record.raw_mean,
                record.plaintext_bytes,
                record.entropy_source,
                " [SUBMITTED]" if record.submitted else "",
                record.generate_ms,
                record.seal_ms,
                record.total_ms,
            )
        elif log_level == "full":
            logger.info("seal_record: %s", json.dumps(asdict(record), default=str))

    def get_diagnostic_data(self) -> list[SealRecord]:
        """Return all stored records (empty unless diagnostic mode is on)."""
        with self._lock:
            return list(self._records)

    def get_summary_stats(self) -> dict[str, Any]:
        """Compute aggregate statistics over the stored records.

        Returns:
            Dictionary of aggregates, or an empty dict if no records.
        """
        records = self.get_diagnostic_data()
        if not records:
            return {}

        n = len(records)
        raw_means = [r.raw_mean for r in records]
        total_times = [r.total_ms for r in records]
        return {
            "total_transactions": n,
            "mean_raw_mean": sum(raw_means) / n,
            "mean_output_count": sum(r.output_count for r in records) / n,
            "mean_primary_count": sum(r.primary_count for r in records) / n,
            "mean_plaintext_bytes": sum(r.plaintext_bytes for r in records) / n,
            "mean_seal_ms": sum(r.seal_ms for r in records) / n,
            "mean_total_ms": sum(total_times) / n,
            "max_total_ms": max(total_times),
            "submitted_count": sum(1 for r in records if r.submitted),
        }
