# ==============================================================================
# Bytewax Sinks
# ==============================================================================
"""
Custom Bytewax sinks for bulk writes.
"""

from searchsink.framework.bytewax.sinks.opensearch import BulkSinkPartition, OpenSearchBulkSink

__all__ = [
    "BulkSinkPartition",
    "OpenSearchBulkSink",
]
