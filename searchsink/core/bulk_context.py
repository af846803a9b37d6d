# ==============================================================================
# Bulk Context
# ==============================================================================
"""
Per-worker batching engine.

A BulkContext owns exactly one store client and one live BulkBuffer:

    add(request)  - in-memory append, never performs I/O
    flush()       - one bulk write for everything buffered so far
    close()       - final flush, then release the client on every exit path

A buffer is swapped for a fresh one only after a fully successful flush. On
any failure (rejected items or an unreachable store) the same buffer stays
live, so the next flush re-sends the whole batch plus anything added since.
Re-sending already accepted items is only safe when the write requests are
idempotent (explicit ids, external versions).

The host framework calls add/flush/close sequentially on one context, so the
context does no locking.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from searchsink.base.capabilities import BulkClient
from searchsink.core.exceptions import BulkWriteError, ContextClosedError, StoreConnectionError
from searchsink.core.models import BulkBuffer, WriteOptions, WriteRequest

logger = logging.getLogger(__name__)


@dataclass
class FlushStats:
    """Cumulative flush statistics for one context."""

    batches: int = 0
    requests: int = 0
    failed_flushes: int = 0
    total_flush_ms: float = 0.0

    @property
    def avg_flush_ms(self) -> float:
        return self.total_flush_ms / self.batches if self.batches else 0.0


class BulkContext:
    """Owns one client handle and one pending buffer for a single worker."""

    def __init__(
        self,
        client: BulkClient,
        buffer_factory: Callable[[], BulkBuffer],
        options_fn: Callable[[BulkBuffer], WriteOptions],
        log: Optional[logging.Logger] = None,
    ):
        """
        Initialize the context with an already opened client.

        Args:
            client: Connected store client, owned exclusively by this context
            buffer_factory: Supplies a fresh empty buffer after each successful flush
            options_fn: Derives write options from the pending buffer
            log: Optional logger override. Defaults to this module's logger.
        """
        self._client = client
        self._buffer_factory = buffer_factory
        self._options_fn = options_fn
        self._log = log or logger

        self._buffer = buffer_factory()
        self._closed = False
        self._stats = FlushStats()

    @property
    def buffer(self) -> BulkBuffer:
        """The live buffer receiving new requests."""
        return self._buffer

    @property
    def stats(self) -> FlushStats:
        return self._stats

    @property
    def closed(self) -> bool:
        return self._closed

    def add(self, request: WriteRequest) -> None:
        """Append a request to the current batch."""
        self._check_open()
        self._buffer.add(request)

    def flush(self) -> None:
        """
        Write all buffered requests as one bulk request.

        Does nothing when the buffer is empty.

        Raises:
            BulkWriteError: The store rejected some or all requests. The buffer is kept.
            StoreConnectionError: The store was unreachable. The buffer is kept.
            ContextClosedError: The context was already closed.
        """
        self._check_open()
        self._flush()

    def close(self) -> None:
        """
        Flush remaining requests and release the client.

        The client is released even when the final flush raises; the flush
        error is then propagated. Closing an already closed context is a no-op.
        """
        if self._closed:
            return

        self._log.debug("Closing BulkContext (%d pending requests)", len(self._buffer))
        try:
            self._flush()
        finally:
            self._closed = True
            self._release_client()
            self._log_final_summary()

    def __enter__(self) -> "BulkContext":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _flush(self) -> None:
        buffer = self._buffer
        if buffer.is_empty:
            return

        options = self._options_fn(buffer)
        t0 = time.monotonic()
        try:
            result = self._client.bulk(buffer, options)
        except (StoreConnectionError, BulkWriteError) as e:
            self._stats.failed_flushes += 1
            self._log.warning("Bulk request with %d requests failed: %s", len(buffer), e)
            raise

        elapsed_ms = (time.monotonic() - t0) * 1000

        if result.has_failures:
            self._stats.failed_flushes += 1
            self._log.warning(
                "Bulk request with %d requests had %d failures, keeping batch for next flush",
                len(buffer),
                len(result.failures),
            )
            raise BulkWriteError(result.failure_message(), result=result)

        self._stats.batches += 1
        self._stats.requests += len(buffer)
        self._stats.total_flush_ms += elapsed_ms
        self._log.debug(
            "Bulk request with %d requests succeeded in %.1fms", len(buffer), elapsed_ms
        )

        self._buffer = self._buffer_factory()

    def _release_client(self) -> None:
        try:
            self._client.close()
        except Exception as e:
            self._log.warning("Error closing store client: %s", e)

    def _log_final_summary(self) -> None:
        stats = self._stats
        self._log.info(
            "BulkContext closed: %d requests in %d batches (avg_flush=%.1fms, failed_flushes=%d)",
            stats.requests,
            stats.batches,
            stats.avg_flush_ms,
            stats.failed_flushes,
        )

    def _check_open(self) -> None:
        if self._closed:
            raise ContextClosedError("BulkContext is closed")
