# ==============================================================================
# Capability Abstract Base Classes
# ==============================================================================
"""
Single-method capability interfaces for the bulk sink.

The sink ships its collaborators to every worker, so each one is expressed as
a small, explicitly constructed value implementing one method rather than an
arbitrary closure. Plain callables with the same signature are accepted
wherever a capability is expected.

Includes:
- BulkClient: the store's bulk-write capability (bulk + close)
- ClientConfig: connection configuration that opens a BulkClient
- ClientFactory: supplies a ClientConfig
- RequestMapper: maps one domain record to one WriteRequest
- BufferFactory: supplies a fresh, empty BulkBuffer
- OptionsProvider: derives WriteOptions from the pending buffer

DefaultBufferFactory and DefaultOptionsProvider are the stateless defaults.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from searchsink.core.models import BulkBuffer, BulkResult, WriteOptions, WriteRequest

T = TypeVar("T")


class BulkClient(ABC):
    """Connected handle to the document store."""

    @abstractmethod
    def bulk(self, buffer: BulkBuffer, options: WriteOptions) -> BulkResult:
        """
        Execute one bulk write.

        Args:
            buffer: Pending requests, dispatched in insertion order
            options: Headers and query parameters for this request

        Returns:
            BulkResult describing per-item success or failure

        Raises:
            StoreConnectionError: The store could not be reached
            BulkWriteError: The store rejected the request as a whole
        """
        ...

    @abstractmethod
    def close(self) -> None:
        """Close the connection and release resources."""
        ...


class ClientConfig(ABC):
    """Connection configuration for the document store."""

    @abstractmethod
    def connect(self) -> BulkClient:
        """Open a connection described by this configuration."""
        ...


class ClientFactory(ABC):
    """Supplies the connection configuration, evaluated once per worker."""

    @abstractmethod
    def __call__(self) -> ClientConfig: ...


class RequestMapper(ABC, Generic[T]):
    """Maps one domain record to one write request. Must be pure."""

    @abstractmethod
    def __call__(self, record: T) -> WriteRequest: ...


class BufferFactory(ABC):
    """Supplies a fresh, empty buffer for the next batch."""

    @abstractmethod
    def __call__(self) -> BulkBuffer: ...


class OptionsProvider(ABC):
    """Derives write options from the pending buffer on every flush."""

    @abstractmethod
    def __call__(self, buffer: BulkBuffer) -> WriteOptions: ...


class DefaultBufferFactory(BufferFactory):
    """Empty buffer with no preset batch parameters."""

    def __call__(self) -> BulkBuffer:
        return BulkBuffer()

    def __repr__(self) -> str:
        return "DefaultBufferFactory()"


class DefaultOptionsProvider(OptionsProvider):
    """Always returns WriteOptions.DEFAULT."""

    def __call__(self, buffer: BulkBuffer) -> WriteOptions:
        return WriteOptions.DEFAULT

    def __repr__(self) -> str:
        return "DefaultOptionsProvider()"
