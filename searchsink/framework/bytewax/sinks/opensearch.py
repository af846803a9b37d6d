# ==============================================================================
# OpenSearch Bulk Sink for Bytewax
# ==============================================================================
"""
OpenSearch bulk sink for Bytewax dataflows.

Thin adapter that drives a BulkSink from Bytewax's sink lifecycle:

    DynamicSink.build()          -> BulkSink.create_context()  (one per worker)
    StatelessSinkPartition.write_batch()
                                 -> BulkSink.receive() per item, then flush()
    StatelessSinkPartition.close()
                                 -> BulkSink.destroy()

Bytewax's batch boundary is the flush cadence. A failed flush raises into the
dataflow while the context keeps the failed batch.
"""

import logging
from typing import Any, List

from bytewax.outputs import DynamicSink, StatelessSinkPartition

from searchsink.core.builder import BulkSink, WorkerContext
from searchsink.core.bulk_context import BulkContext
from searchsink.core.exceptions import BulkWriteError, StoreConnectionError

logger = logging.getLogger(__name__)


class BulkSinkPartition(StatelessSinkPartition):
    """
    Partition handler owning one BulkContext.

    Maps and buffers every item of a batch, then writes it as one bulk request.
    """

    def __init__(self, sink: BulkSink, context: BulkContext):
        """
        Initialize the partition.

        Args:
            sink: Built sink providing the lifecycle callbacks
            context: This worker's BulkContext
        """
        self._sink = sink
        self._context = context

    @property
    def context(self) -> BulkContext:
        return self._context

    def write_batch(self, items: List[Any]) -> None:
        """
        Buffer a batch of records and flush it.

        Args:
            items: Records from the upstream step
        """
        for item in items:
            self._sink.receive(self._context, item)

        try:
            self._sink.flush(self._context)
        except StoreConnectionError as e:
            logger.warning("Connection error, batch kept for next flush: %s", e)
            raise
        except BulkWriteError as e:
            logger.error("Failed to write batch to OpenSearch: %s", e)
            raise

    def close(self) -> None:
        """Flush remaining requests and close the connection."""
        self._sink.destroy(self._context)


class OpenSearchBulkSink(DynamicSink):
    """
    Bytewax sink for bulk writes to OpenSearch.

    Wraps a BulkSink and creates a partition handler, and with it a
    BulkContext, for each worker.
    """

    def __init__(self, sink: BulkSink):
        """
        Initialize the sink.

        Args:
            sink: Built sink, see SinkBuilder.build()
        """
        self._sink = sink

    @property
    def sink(self) -> BulkSink:
        return self._sink

    def build(self, step_id: str, worker_index: int, worker_count: int) -> BulkSinkPartition:
        """
        Build a partition handler for this worker.

        Args:
            step_id: Unique step identifier
            worker_index: Index of this worker
            worker_count: Total number of workers

        Returns:
            BulkSinkPartition instance
        """
        worker = WorkerContext(
            step_id=step_id,
            worker_index=worker_index,
            worker_count=worker_count,
        )
        context = self._sink.create_context(worker)
        return BulkSinkPartition(self._sink, context)
