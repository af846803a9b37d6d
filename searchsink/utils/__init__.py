# ==============================================================================
# Bulk Sink Utilities
# ==============================================================================
"""
Shared utilities: configuration and retry helpers.
"""

from searchsink.utils.config import (
    OpenSearchSettings,
    Settings,
    SinkSettings,
    get_settings,
)
from searchsink.utils.retry import retry_light

__all__ = [
    "OpenSearchSettings",
    "Settings",
    "SinkSettings",
    "get_settings",
    "retry_light",
]
