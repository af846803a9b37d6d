# ==============================================================================
# Bulk Sink Domain Models
# ==============================================================================
"""
Models for the bulk sink batching engine.

- WriteRequest and its concrete kinds (IndexRequest, UpdateRequest,
  DeleteRequest): one store operation derived from one domain record
- BulkBuffer: ordered accumulator of pending write requests
- WriteOptions: per-flush request metadata (headers, query params)
- BulkResult / BulkItemFailure: outcome of one bulk write

Write requests render themselves into the newline-delimited bulk body format
(an action line, optionally followed by a source line).
"""

from abc import abstractmethod
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, ClassVar, Iterator, Literal, Mapping, Optional, Union

from pydantic import BaseModel, Field

RefreshPolicy = Union[bool, Literal["true", "false", "wait_for"]]


# ==============================================================================
# Write Requests
# ==============================================================================


class WriteRequest(BaseModel):
    """Base class for a single store write operation."""

    model_config = {"frozen": True}

    index: str = Field(..., min_length=1, description="Target index name")
    id: Optional[str] = Field(default=None, description="Document id")
    routing: Optional[str] = Field(default=None, description="Custom shard routing value")

    @property
    @abstractmethod
    def op_type(self) -> str:
        """Bulk action name (index, create, update, delete)."""
        ...

    def _action_metadata(self) -> dict[str, Any]:
        meta: dict[str, Any] = {"_index": self.index}
        if self.id is not None:
            meta["_id"] = self.id
        if self.routing is not None:
            meta["routing"] = self.routing
        return meta

    @abstractmethod
    def to_bulk_lines(self) -> list[dict]:
        """Render this request as bulk body lines."""
        ...


class IndexRequest(WriteRequest):
    """
    Index (or create) one document.

    With ``op_type="create"`` the write fails if a document with the same id
    already exists. An external ``version`` makes re-sent writes idempotent.
    """

    source: dict[str, Any] = Field(..., description="Document body")
    create: bool = Field(default=False, description="Use the create action instead of index")
    version: Optional[int] = Field(default=None, ge=0)
    version_type: Optional[Literal["external", "external_gte"]] = None
    pipeline: Optional[str] = Field(default=None, description="Ingest pipeline")

    @property
    def op_type(self) -> str:
        return "create" if self.create else "index"

    def to_bulk_lines(self) -> list[dict]:
        meta = self._action_metadata()
        if self.version is not None:
            meta["version"] = self.version
            meta["version_type"] = self.version_type or "external"
        if self.pipeline is not None:
            meta["pipeline"] = self.pipeline
        return [{self.op_type: meta}, self.source]


class UpdateRequest(WriteRequest):
    """Partially update one document, optionally upserting it."""

    id: str = Field(..., min_length=1, description="Document id")
    doc: dict[str, Any] = Field(..., description="Partial document")
    upsert: Optional[dict[str, Any]] = None
    doc_as_upsert: bool = False
    retry_on_conflict: Optional[int] = Field(default=None, ge=0)

    @property
    def op_type(self) -> str:
        return "update"

    def to_bulk_lines(self) -> list[dict]:
        meta = self._action_metadata()
        if self.retry_on_conflict is not None:
            meta["retry_on_conflict"] = self.retry_on_conflict

        body: dict[str, Any] = {"doc": self.doc}
        if self.upsert is not None:
            body["upsert"] = self.upsert
        if self.doc_as_upsert:
            body["doc_as_upsert"] = True
        return [{"update": meta}, body]


class DeleteRequest(WriteRequest):
    """Delete one document by id."""

    id: str = Field(..., min_length=1, description="Document id")
    version: Optional[int] = Field(default=None, ge=0)
    version_type: Optional[Literal["external", "external_gte"]] = None

    @property
    def op_type(self) -> str:
        return "delete"

    def to_bulk_lines(self) -> list[dict]:
        meta = self._action_metadata()
        if self.version is not None:
            meta["version"] = self.version
            meta["version_type"] = self.version_type or "external"
        return [{"delete": meta}]


# ==============================================================================
# Bulk Buffer
# ==============================================================================


class BulkBuffer:
    """
    Ordered accumulator of pending write requests for one batch.

    Batch-level parameters (refresh policy, timeout, ...) are fixed when the
    buffer is created and sent as query parameters with the bulk request.
    Construct it through a buffer factory to preset them, e.g.
    ``lambda: BulkBuffer(refresh="wait_for")``.
    """

    def __init__(
        self,
        refresh: Optional[RefreshPolicy] = None,
        timeout: Optional[str] = None,
        wait_for_active_shards: Optional[Union[int, str]] = None,
        pipeline: Optional[str] = None,
    ):
        self._requests: list[WriteRequest] = []
        self.refresh = refresh
        self.timeout = timeout
        self.wait_for_active_shards = wait_for_active_shards
        self.pipeline = pipeline

    def add(self, request: WriteRequest) -> "BulkBuffer":
        """Append a request, preserving insertion order."""
        self._requests.append(request)
        return self

    @property
    def requests(self) -> tuple[WriteRequest, ...]:
        """Snapshot of the pending requests in insertion order."""
        return tuple(self._requests)

    @property
    def is_empty(self) -> bool:
        return not self._requests

    def __len__(self) -> int:
        return len(self._requests)

    def __iter__(self) -> Iterator[WriteRequest]:
        return iter(self._requests)

    def params(self) -> dict[str, str]:
        """Batch-level query parameters, omitting unset values."""
        params: dict[str, str] = {}
        if self.refresh is not None:
            refresh = self.refresh
            params["refresh"] = str(refresh).lower() if isinstance(refresh, bool) else refresh
        if self.timeout is not None:
            params["timeout"] = self.timeout
        if self.wait_for_active_shards is not None:
            params["wait_for_active_shards"] = str(self.wait_for_active_shards)
        if self.pipeline is not None:
            params["pipeline"] = self.pipeline
        return params

    def to_body(self) -> list[dict]:
        """Flatten all requests into bulk body lines."""
        body: list[dict] = []
        for request in self._requests:
            body.extend(request.to_bulk_lines())
        return body

    def __repr__(self) -> str:
        return f"BulkBuffer(requests={len(self._requests)}, params={self.params()})"


# ==============================================================================
# Write Options
# ==============================================================================


@dataclass(frozen=True)
class WriteOptions:
    """
    Per-flush request metadata.

    Derived from the pending buffer on every flush, so it can carry values
    that must be fresh per request (e.g. short-lived auth tokens).
    """

    DEFAULT: ClassVar["WriteOptions"]

    headers: Mapping[str, str] = field(default_factory=dict)
    params: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Read-only views, so DEFAULT can be shared by every context
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))

    def __reduce__(self):
        return (WriteOptions, (dict(self.headers), dict(self.params)))

    def with_header(self, name: str, value: str) -> "WriteOptions":
        """Return a copy with an additional HTTP header."""
        return replace(self, headers={**self.headers, name: value})

    def with_param(self, name: str, value: str) -> "WriteOptions":
        """Return a copy with an additional query parameter."""
        return replace(self, params={**self.params, name: value})


WriteOptions.DEFAULT = WriteOptions()


# ==============================================================================
# Bulk Result
# ==============================================================================


@dataclass(frozen=True)
class BulkItemFailure:
    """One failed item of a bulk response."""

    position: int
    op_type: str
    index: Optional[str]
    id: Optional[str]
    status: Optional[int]
    reason: str

    def describe(self) -> str:
        return (
            f"[{self.position}]: index [{self.index}], id [{self.id}], "
            f"status [{self.status}], message [{self.reason}]"
        )


@dataclass(frozen=True)
class BulkResult:
    """
    Outcome of one bulk write.

    A batch counts as failed when the response flags errors or any item
    carries an error; there is no partial commit at this layer.
    """

    items: int
    took_ms: int = 0
    errors: bool = False
    failures: tuple[BulkItemFailure, ...] = ()

    @property
    def has_failures(self) -> bool:
        return self.errors or bool(self.failures)

    @property
    def succeeded(self) -> int:
        return self.items - len(self.failures)

    def failure_message(self) -> str:
        """Aggregated failure description, one line per failed item."""
        if not self.has_failures:
            return ""
        if not self.failures:
            return "failure in bulk execution: response reported errors without item details"
        lines = ["failure in bulk execution:"]
        lines.extend(failure.describe() for failure in self.failures)
        return "\n".join(lines)

    @classmethod
    def from_response(cls, response: dict) -> "BulkResult":
        """
        Build a result from a bulk API response body.

        Args:
            response: Parsed response with ``took``, ``errors`` and ``items``

        Returns:
            BulkResult with per-item failures in request order
        """
        items = response.get("items") or []
        failures = []

        for position, item in enumerate(items):
            # Each item is a single-key dict: {op_type: {...}}
            if not item or not isinstance(next(iter(item.values())), dict):
                failures.append(
                    BulkItemFailure(
                        position=position,
                        op_type="unknown",
                        index=None,
                        id=None,
                        status=None,
                        reason="malformed item",
                    )
                )
                continue
            op_type, outcome = next(iter(item.items()))
            status = outcome.get("status")
            error = outcome.get("error")
            if error is None and (status is None or status < 300):
                continue
            failures.append(
                BulkItemFailure(
                    position=position,
                    op_type=op_type,
                    index=outcome.get("_index"),
                    id=outcome.get("_id"),
                    status=status,
                    reason=_format_error(error),
                )
            )

        return cls(
            items=len(items),
            took_ms=response.get("took", 0),
            errors=bool(response.get("errors", False)),
            failures=tuple(failures),
        )


def _format_error(error: Any) -> str:
    if error is None:
        return "unknown error"
    if isinstance(error, dict):
        error_type = error.get("type")
        reason = error.get("reason", "")
        return f"{error_type}: {reason}" if error_type else str(reason)
    return str(error)
