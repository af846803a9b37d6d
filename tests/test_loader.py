# ==============================================================================
# Tests for the JSON Lines Loader: framework/bytewax/loader.py
# ==============================================================================
"""
Tests for the loader's mapper, line parsing, sink assembly, and an end-to-end
dataflow run using Bytewax's testing source against a fake store.
"""

import pytest
from bytewax.testing import TestingSource, run_main

from fakes import FakeBulkClient, FakeClientConfig
from searchsink.core.builder import SinkBuilder
from searchsink.core.models import IndexRequest
from searchsink.framework.bytewax.loader import (
    ConfiguredClientFactory,
    JsonDocumentMapper,
    RefreshBufferFactory,
    build_flow,
    build_sink,
    parse_json_line,
)
from searchsink.infrastructure.search.opensearch import OpenSearchClientConfig
from searchsink.utils.config import OpenSearchSettings, Settings, SinkSettings


class TestJsonDocumentMapper:
    def test_maps_with_id_field(self):
        request = JsonDocumentMapper("events", id_field="event_id")({"event_id": 42, "x": 1})

        assert request == IndexRequest(
            index="events", id="42", source={"event_id": 42, "x": 1}
        )

    def test_maps_without_id_field(self):
        request = JsonDocumentMapper("events")({"x": 1})

        assert request.id is None
        assert request.op_type == "index"

    def test_create_mode(self):
        request = JsonDocumentMapper("events", id_field="id", op_type="create")({"id": 1})

        assert request.op_type == "create"
        assert request.to_bulk_lines()[0] == {"create": {"_index": "events", "_id": "1"}}

    def test_unknown_op_type_rejected(self):
        with pytest.raises(ValueError, match="op_type must be"):
            JsonDocumentMapper("events", op_type="upsert")

    def test_missing_id_field(self):
        with pytest.raises(ValueError, match="has no 'event_id' field"):
            JsonDocumentMapper("events", id_field="event_id")({"x": 1})


class TestParseJsonLine:
    def test_parses_object(self):
        assert parse_json_line('{"a": 1}\n') == {"a": 1}

    def test_blank_line_skipped(self):
        assert parse_json_line("   \n") is None

    def test_non_object_rejected(self):
        with pytest.raises(ValueError, match="Expected a JSON object"):
            parse_json_line("[1, 2]")


class TestBuildSink:
    def test_assembled_from_settings(self):
        settings = Settings(
            opensearch=OpenSearchSettings(host="os.local", port=9201),
            sink=SinkSettings(name="events_out", parallelism=3, refresh="wait_for"),
        )

        sink = build_sink("events", id_field="id", settings=settings)

        assert sink.name == "events_out"
        assert sink.preferred_local_parallelism == 3
        assert isinstance(sink.config.client_fn, ConfiguredClientFactory)
        client_config = sink.config.client_fn()
        assert isinstance(client_config, OpenSearchClientConfig)
        assert client_config.hosts == [{"host": "os.local", "port": 9201}]
        assert sink.config.bulk_request_fn().params() == {"refresh": "wait_for"}

    def test_refresh_buffer_factory_default(self):
        assert RefreshBufferFactory(None)().params() == {}


class TestDataflow:
    """End-to-end run of the loader flow with an in-memory store."""

    def test_documents_written_in_order(self):
        client = FakeBulkClient()
        sink = (
            SinkBuilder()
            .client_fn(lambda: FakeClientConfig(client))
            .map_to_request_fn(JsonDocumentMapper("events", id_field="id"))
            .build()
        )
        lines = ['{"id": 1, "v": "a"}', "", '{"id": 2, "v": "b"}', '{"id": 3, "v": "c"}']

        run_main(build_flow(TestingSource(lines), sink))

        sent = [request for batch in client.sent for request in batch]
        assert [r.id for r in sent] == ["1", "2", "3"]
        assert sent[0].source == {"id": 1, "v": "a"}
        assert client.close_calls == 1
