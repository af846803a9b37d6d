# ==============================================================================
# Bulk Sink Core
# ==============================================================================
"""
Batching engine of the bulk sink: models, exceptions, BulkContext and builder.

This package has no dependency on the store client or the host framework.
"""

from searchsink.core.builder import (
    DEFAULT_LOCAL_PARALLELISM,
    DEFAULT_NAME,
    BulkSink,
    SinkBuilder,
    SinkConfig,
    WorkerContext,
)
from searchsink.core.bulk_context import BulkContext, FlushStats
from searchsink.core.exceptions import (
    BulkWriteError,
    ConfigurationError,
    ContextClosedError,
    SinkError,
    StoreConnectionError,
)
from searchsink.core.models import (
    BulkBuffer,
    BulkItemFailure,
    BulkResult,
    DeleteRequest,
    IndexRequest,
    UpdateRequest,
    WriteOptions,
    WriteRequest,
)

__all__ = [
    # Builder
    "DEFAULT_LOCAL_PARALLELISM",
    "DEFAULT_NAME",
    "BulkSink",
    "SinkBuilder",
    "SinkConfig",
    "WorkerContext",
    # Context
    "BulkContext",
    "FlushStats",
    # Exceptions
    "BulkWriteError",
    "ConfigurationError",
    "ContextClosedError",
    "SinkError",
    "StoreConnectionError",
    # Models
    "BulkBuffer",
    "BulkItemFailure",
    "BulkResult",
    "DeleteRequest",
    "IndexRequest",
    "UpdateRequest",
    "WriteOptions",
    "WriteRequest",
]
