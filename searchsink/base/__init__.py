# ==============================================================================
# Base Abstract Classes
# ==============================================================================
"""
Abstract base classes defining the capabilities the bulk sink is assembled from.

Concrete store adapters live in infrastructure/, framework adapters in framework/.
"""

from searchsink.base.capabilities import (
    BufferFactory,
    BulkClient,
    ClientConfig,
    ClientFactory,
    DefaultBufferFactory,
    DefaultOptionsProvider,
    OptionsProvider,
    RequestMapper,
)

__all__ = [
    "BufferFactory",
    "BulkClient",
    "ClientConfig",
    "ClientFactory",
    "DefaultBufferFactory",
    "DefaultOptionsProvider",
    "OptionsProvider",
    "RequestMapper",
]
