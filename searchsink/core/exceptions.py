# ==============================================================================
# Sink Exceptions
# ==============================================================================
"""
Exception hierarchy for the bulk sink.

- SinkError: base class for everything raised by this package
- ConfigurationError: builder misconfiguration, raised before any worker starts
- BulkWriteError: the store rejected some or all requests of a flushed batch
- StoreConnectionError: the store could not be reached during a flush
- ContextClosedError: a BulkContext was used after close()
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from searchsink.core.models import BulkResult


class SinkError(Exception):
    """Base class for bulk sink errors."""


class ConfigurationError(SinkError):
    """A required builder field is missing or invalid."""


class BulkWriteError(SinkError):
    """
    The store reported failures for a flushed batch.

    The pending buffer is kept intact, so the next flush re-sends every
    request of the failed batch.
    """

    def __init__(
        self,
        message: str,
        result: Optional["BulkResult"] = None,
        status: Optional[int] = None,
    ):
        super().__init__(message)
        self.result = result
        self.status = status

    @property
    def failures(self) -> list:
        """Per-item failures, empty when the whole request was rejected."""
        return list(self.result.failures) if self.result is not None else []


class StoreConnectionError(SinkError):
    """The store was unreachable or timed out during a flush."""


class ContextClosedError(SinkError):
    """The BulkContext has been closed and can no longer be used."""
