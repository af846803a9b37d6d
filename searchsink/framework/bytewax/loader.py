# ==============================================================================
# JSON Lines Loader using Bytewax
# ==============================================================================
"""
Bulk-load newline-delimited JSON documents into OpenSearch with Bytewax.

The data flow is:
- Lines are read from a file (FileSource)
- Each non-blank line is parsed as one JSON document
- Documents are mapped to IndexRequests and bulk-written by OpenSearchBulkSink

Every collaborator handed to the sink is a small explicit value (mapper,
client factory, buffer factory) so each worker can rebuild it without shared
state.
"""

import json
import logging
from pathlib import Path
from typing import Literal, Optional

from bytewax import operators as op
from bytewax.connectors.files import FileSource
from bytewax.dataflow import Dataflow
from bytewax.inputs import Source
from bytewax.run import cli_main

from searchsink.base.capabilities import BufferFactory, ClientFactory, RequestMapper
from searchsink.core.builder import BulkSink, SinkBuilder
from searchsink.core.models import BulkBuffer, IndexRequest
from searchsink.framework.bytewax.sinks.opensearch import OpenSearchBulkSink
from searchsink.infrastructure.search.opensearch import OpenSearchClientConfig
from searchsink.utils.config import Settings, get_settings

logger = logging.getLogger(__name__)


class JsonDocumentMapper(RequestMapper[dict]):
    """Maps a JSON document to an IndexRequest."""

    def __init__(
        self,
        index: str,
        id_field: Optional[str] = None,
        op_type: Literal["index", "create"] = "index",
    ):
        """
        Args:
            index: Target index name
            id_field: Document field used as the document id. Explicit ids make
                      re-sent batches overwrite instead of duplicating documents.
            op_type: "index" (overwrite) or "create" (fail on existing ids)
        """
        self.index = index
        self.id_field = id_field
        if op_type not in ("index", "create"):
            raise ValueError(f"op_type must be 'index' or 'create', got {op_type!r}")
        self.op_type = op_type

    def __call__(self, record: dict) -> IndexRequest:
        doc_id = None
        if self.id_field:
            value = record.get(self.id_field)
            if value is None:
                raise ValueError(f"Document has no '{self.id_field}' field: {record!r}")
            doc_id = str(value)
        return IndexRequest(
            index=self.index, id=doc_id, source=record, create=self.op_type == "create"
        )

    def __repr__(self) -> str:
        return (
            f"JsonDocumentMapper(index={self.index!r}, id_field={self.id_field!r}, "
            f"op_type={self.op_type!r})"
        )


class ConfiguredClientFactory(ClientFactory):
    """Supplies a fixed OpenSearch connection configuration."""

    def __init__(self, config: OpenSearchClientConfig):
        self.config = config

    def __call__(self) -> OpenSearchClientConfig:
        return self.config


class RefreshBufferFactory(BufferFactory):
    """Empty buffer with a preset refresh policy."""

    def __init__(self, refresh: Optional[str]):
        self.refresh = refresh

    def __call__(self) -> BulkBuffer:
        return BulkBuffer(refresh=self.refresh)


def parse_json_line(line: str) -> Optional[dict]:
    """Parse one line as a JSON object; blank lines yield None."""
    line = line.strip()
    if not line:
        return None
    document = json.loads(line)
    if not isinstance(document, dict):
        raise ValueError(f"Expected a JSON object, got {type(document).__name__}")
    return document


def build_sink(
    index: str,
    id_field: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> BulkSink[dict]:
    """
    Build the bulk sink for the loader from settings.

    Args:
        index: Target index name
        id_field: Optional document id field
        settings: Application settings. If None, uses get_settings().
    """
    settings = settings or get_settings()
    return (
        SinkBuilder()
        .client_fn(ConfiguredClientFactory(OpenSearchClientConfig.from_settings(settings)))
        .bulk_request_fn(RefreshBufferFactory(settings.sink.refresh))
        .map_to_request_fn(JsonDocumentMapper(index, id_field))
        .name(settings.sink.name)
        .preferred_local_parallelism(settings.sink.parallelism)
        .build()
    )


def build_flow(source: Source, sink: BulkSink[dict]) -> Dataflow:
    """
    Create the loader dataflow.

    Args:
        source: Bytewax source emitting JSON lines
        sink: Built bulk sink
    """
    flow = Dataflow("searchsink_loader")
    lines = op.input("lines_in", flow, source)
    documents = op.filter_map("parse", lines, parse_json_line)
    op.output(sink.name, documents, OpenSearchBulkSink(sink))
    return flow


def run(
    path: Path,
    index: str,
    id_field: Optional[str] = None,
    workers: Optional[int] = None,
) -> None:
    """
    Run the loader dataflow for one file.

    Args:
        path: JSON lines file
        index: Target index name
        id_field: Optional document id field
        workers: Workers per process. Defaults to the sink's preferred parallelism.
    """
    sink = build_sink(index, id_field)
    flow = build_flow(FileSource(path), sink)

    num_workers = workers or sink.preferred_local_parallelism
    logger.info("Loading %s into index '%s' (Bytewax)...", path, index)
    logger.info("Workers per process: %d", num_workers)
    cli_main(flow, workers_per_process=num_workers)

