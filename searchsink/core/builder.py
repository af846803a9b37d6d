# ==============================================================================
# Sink Builder
# ==============================================================================
"""
Builder for the OpenSearch bulk sink.

The sink maps each record with the provided ``map_to_request_fn`` and
accumulates the resulting write requests in a BulkBuffer, which is written to
the store on every flush. ``BulkBuffer()`` is used by default; provide a
``bulk_request_fn`` to preset batch parameters such as the refresh policy.

Usage:
    sink = (
        SinkBuilder()
        .client_fn(lambda: opensearch_client("localhost", 9200))
        .map_to_request_fn(lambda doc: IndexRequest(index="my-index", source=doc))
        .build()
    )

``client_fn`` and ``map_to_request_fn`` are required; ``build()`` raises
ConfigurationError when either is missing.

The built BulkSink is what the host framework consumes: a per-worker context
factory plus the receive/flush/destroy callbacks it invokes on its own
schedule.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar, cast

from searchsink.base.capabilities import (
    ClientConfig,
    DefaultBufferFactory,
    DefaultOptionsProvider,
)
from searchsink.core.bulk_context import BulkContext
from searchsink.core.exceptions import ConfigurationError
from searchsink.core.models import BulkBuffer, WriteOptions, WriteRequest

logger = logging.getLogger(__name__)

T = TypeVar("T")
T_NEW = TypeVar("T_NEW")

DEFAULT_NAME = "opensearchSink"
DEFAULT_LOCAL_PARALLELISM = 2


def _check_callable(fn: Any, name: str) -> Any:
    if fn is None:
        raise ConfigurationError(f"{name} must not be None")
    if not callable(fn):
        raise ConfigurationError(f"{name} must be callable, got {type(fn).__name__}")
    return fn


@dataclass(frozen=True)
class WorkerContext:
    """Identifies the worker a BulkContext is created for."""

    step_id: str = DEFAULT_NAME
    worker_index: int = 0
    worker_count: int = 1


@dataclass(frozen=True)
class SinkConfig(Generic[T]):
    """Validated collaborators of a bulk sink."""

    client_fn: Callable[[], ClientConfig]
    map_to_request_fn: Callable[[T], WriteRequest]
    bulk_request_fn: Callable[[], BulkBuffer]
    options_fn: Callable[[BulkBuffer], WriteOptions]
    name: str = DEFAULT_NAME
    preferred_local_parallelism: int = DEFAULT_LOCAL_PARALLELISM


class SinkBuilder(Generic[T]):
    """Assembles and validates a BulkSink."""

    def __init__(self) -> None:
        self._client_fn: Optional[Callable[[], ClientConfig]] = None
        self._map_to_request_fn: Optional[Callable[[Any], WriteRequest]] = None
        self._bulk_request_fn: Callable[[], BulkBuffer] = DefaultBufferFactory()
        self._options_fn: Callable[[BulkBuffer], WriteOptions] = DefaultOptionsProvider()
        self._name = DEFAULT_NAME
        self._preferred_local_parallelism = DEFAULT_LOCAL_PARALLELISM

    def client_fn(self, client_fn: Callable[[], ClientConfig]) -> "SinkBuilder[T]":
        """
        Set the supplier of the store connection configuration.

        Evaluated once per worker; the returned config's ``connect()`` opens
        the client that worker's context owns. Required.
        """
        self._client_fn = _check_callable(client_fn, "client_fn")
        return self

    def bulk_request_fn(self, bulk_request_fn: Callable[[], BulkBuffer]) -> "SinkBuilder[T]":
        """
        Set the supplier of fresh buffers. Defaults to ``BulkBuffer()``.

        For example, to make indexed documents visible before the flush returns:
            builder.bulk_request_fn(lambda: BulkBuffer(refresh="wait_for"))
        """
        self._bulk_request_fn = _check_callable(bulk_request_fn, "bulk_request_fn")
        return self

    def map_to_request_fn(
        self, map_to_request_fn: Callable[[T_NEW], WriteRequest]
    ) -> "SinkBuilder[T_NEW]":
        """
        Set the function mapping a record to an Index, Update or Delete request.

        Retargets the builder to the mapper's record type. Required.
        """
        new_this = cast("SinkBuilder[T_NEW]", self)
        new_this._map_to_request_fn = _check_callable(map_to_request_fn, "map_to_request_fn")
        return new_this

    def options_fn(self, options_fn: Callable[[BulkBuffer], WriteOptions]) -> "SinkBuilder[T]":
        """
        Set the function providing write options for each flush.

        It can return a constant or derive a value from the pending buffer.
        For example, to send a bearer token:
            builder.options_fn(lambda buffer: WriteOptions.DEFAULT.with_header(
                "Authorization", f"Bearer {TOKEN}"))
        """
        self._options_fn = _check_callable(options_fn, "options_fn")
        return self

    def name(self, name: str) -> "SinkBuilder[T]":
        """Set the sink name used in logs and as the default step id."""
        if not name:
            raise ConfigurationError("name must not be empty")
        self._name = name
        return self

    def preferred_local_parallelism(self, parallelism: int) -> "SinkBuilder[T]":
        """Set how many independent contexts the framework should run per process."""
        if parallelism < 1:
            raise ConfigurationError(
                f"preferred_local_parallelism must be positive, got {parallelism}"
            )
        self._preferred_local_parallelism = parallelism
        return self

    def build(self) -> "BulkSink[T]":
        """
        Create a sink that writes into the store based on this configuration.

        Raises:
            ConfigurationError: client_fn or map_to_request_fn is not set
        """
        missing = []
        if self._client_fn is None:
            missing.append("client_fn is not set")
        if self._map_to_request_fn is None:
            missing.append("map_to_request_fn is not set")
        if missing:
            raise ConfigurationError(", ".join(missing))

        config: SinkConfig[T] = SinkConfig(
            client_fn=self._client_fn,
            map_to_request_fn=self._map_to_request_fn,
            bulk_request_fn=self._bulk_request_fn,
            options_fn=self._options_fn,
            name=self._name,
            preferred_local_parallelism=self._preferred_local_parallelism,
        )
        return BulkSink(config)


class BulkSink(Generic[T]):
    """
    Context factory and lifecycle callbacks handed to the host framework.

    The framework creates one context per worker, calls ``receive`` for every
    record, ``flush`` on its own cadence and ``destroy`` once at shutdown.
    """

    def __init__(self, config: SinkConfig[T]):
        self._config = config

    @property
    def config(self) -> SinkConfig[T]:
        return self._config

    @property
    def name(self) -> str:
        return self._config.name

    @property
    def preferred_local_parallelism(self) -> int:
        return self._config.preferred_local_parallelism

    def create_context(self, worker: Optional[WorkerContext] = None) -> BulkContext:
        """
        Open a client and create the BulkContext for one worker.

        The client is closed again if the context cannot be created.
        """
        worker = worker or WorkerContext(step_id=self.name)
        client = self._config.client_fn().connect()
        try:
            context = BulkContext(
                client,
                self._config.bulk_request_fn,
                self._config.options_fn,
                log=logging.getLogger(
                    f"searchsink.core.bulk_context.{worker.step_id}.{worker.worker_index}"
                ),
            )
        except Exception:
            client.close()
            raise

        logger.debug(
            "Created BulkContext for %s (worker %d/%d)",
            worker.step_id,
            worker.worker_index + 1,
            worker.worker_count,
        )
        return context

    def receive(self, context: BulkContext, record: T) -> None:
        """Map a record and add it to the context's pending batch."""
        context.add(self._config.map_to_request_fn(record))

    def flush(self, context: BulkContext) -> None:
        context.flush()

    def destroy(self, context: BulkContext) -> None:
        context.close()
