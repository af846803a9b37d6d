# ==============================================================================
# searchsink
# ==============================================================================
"""
Batching bulk-write sink for OpenSearch, driven by streaming dataflows.

Usage:
    from searchsink import IndexRequest, SinkBuilder, opensearch_client

    sink = (
        SinkBuilder()
        .client_fn(lambda: opensearch_client("localhost", 9200))
        .map_to_request_fn(lambda doc: IndexRequest(index="docs", id=doc["id"], source=doc))
        .build()
    )
"""

from searchsink.core import (
    BulkBuffer,
    BulkContext,
    BulkResult,
    BulkSink,
    BulkWriteError,
    ConfigurationError,
    ContextClosedError,
    DeleteRequest,
    IndexRequest,
    SinkBuilder,
    SinkError,
    StoreConnectionError,
    UpdateRequest,
    WorkerContext,
    WriteOptions,
    WriteRequest,
)
from searchsink.infrastructure.search import OpenSearchClientConfig, opensearch_client

__all__ = [
    "BulkBuffer",
    "BulkContext",
    "BulkResult",
    "BulkSink",
    "BulkWriteError",
    "ConfigurationError",
    "ContextClosedError",
    "DeleteRequest",
    "IndexRequest",
    "OpenSearchClientConfig",
    "SinkBuilder",
    "SinkError",
    "StoreConnectionError",
    "UpdateRequest",
    "WorkerContext",
    "WriteOptions",
    "WriteRequest",
    "opensearch_client",
]
