# ==============================================================================
# Search Engine Adapters
# ==============================================================================
"""
Search engine adapters implementing the BulkClient capability from base/capabilities.py.

Currently supported:
- OpenSearch (opensearch.py)
"""

from searchsink.infrastructure.search.opensearch import (
    OpenSearchBulkClient,
    OpenSearchClientConfig,
    check_opensearch_connection,
    opensearch_client,
)

__all__ = [
    "OpenSearchBulkClient",
    "OpenSearchClientConfig",
    "check_opensearch_connection",
    "opensearch_client",
]
