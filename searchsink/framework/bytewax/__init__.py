# ==============================================================================
# Bytewax Framework Implementation
# ==============================================================================
"""
Bytewax streaming framework implementation.

Bytewax instantiates one sink partition per worker and drives it through
build -> write_batch -> close, which maps directly onto the BulkSink
lifecycle (create_context -> receive/flush -> destroy).
"""

from searchsink.framework.bytewax.sinks import BulkSinkPartition, OpenSearchBulkSink

__all__ = ["BulkSinkPartition", "OpenSearchBulkSink"]
