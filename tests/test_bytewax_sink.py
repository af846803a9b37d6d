# ==============================================================================
# Tests for the Bytewax Sink: framework/bytewax/sinks/opensearch.py
# ==============================================================================
"""
Tests for the Bytewax adapter: one context per worker, receive+flush per
batch, destroy on close.
"""

import pytest

from fakes import FakeBulkClient, FakeClientConfig, failure_result
from searchsink.core.builder import SinkBuilder
from searchsink.core.exceptions import BulkWriteError, StoreConnectionError
from searchsink.core.models import IndexRequest
from searchsink.framework.bytewax.sinks.opensearch import BulkSinkPartition, OpenSearchBulkSink


def _to_request(doc: dict) -> IndexRequest:
    return IndexRequest(index="docs", id=str(doc["id"]), source=doc)


def _dynamic_sink(client: FakeBulkClient) -> OpenSearchBulkSink:
    sink = (
        SinkBuilder()
        .client_fn(lambda: FakeClientConfig(client))
        .map_to_request_fn(_to_request)
        .build()
    )
    return OpenSearchBulkSink(sink)


class TestOpenSearchBulkSink:
    """Tests for DynamicSink.build."""

    def test_build_creates_partition_with_context(self):
        client = FakeBulkClient()

        partition = _dynamic_sink(client).build("docs_out", 1, 3)

        assert isinstance(partition, BulkSinkPartition)
        assert not partition.context.closed
        assert client.calls == []

    def test_each_worker_gets_its_own_client(self):
        clients = []

        def client_fn():
            client = FakeBulkClient()
            clients.append(client)
            return FakeClientConfig(client)

        sink = SinkBuilder().client_fn(client_fn).map_to_request_fn(_to_request).build()
        dynamic_sink = OpenSearchBulkSink(sink)

        partitions = [dynamic_sink.build("docs_out", i, 2) for i in range(2)]

        assert len(clients) == 2
        assert partitions[0].context is not partitions[1].context


class TestBulkSinkPartition:
    """Tests for write_batch and close."""

    def test_write_batch_flushes_once(self):
        client = FakeBulkClient()
        partition = _dynamic_sink(client).build("docs_out", 0, 1)

        partition.write_batch([{"id": 1}, {"id": 2}, {"id": 3}])

        assert len(client.calls) == 1
        assert [r.id for r in client.sent[0]] == ["1", "2", "3"]
        assert partition.context.buffer.is_empty

    def test_empty_batch_makes_no_call(self):
        client = FakeBulkClient()
        partition = _dynamic_sink(client).build("docs_out", 0, 1)

        partition.write_batch([])

        assert client.calls == []

    def test_failed_batch_is_resent_with_next_batch(self):
        client = FakeBulkClient([failure_result(2)])
        partition = _dynamic_sink(client).build("docs_out", 0, 1)

        with pytest.raises(BulkWriteError):
            partition.write_batch([{"id": 1}, {"id": 2}])

        partition.write_batch([{"id": 3}])

        assert [r.id for r in client.sent[1]] == ["1", "2", "3"]

    def test_connection_error_propagates(self):
        client = FakeBulkClient([StoreConnectionError("refused")])
        partition = _dynamic_sink(client).build("docs_out", 0, 1)

        with pytest.raises(StoreConnectionError):
            partition.write_batch([{"id": 1}])

        assert len(partition.context.buffer) == 1

    def test_close_releases_client(self):
        client = FakeBulkClient()
        partition = _dynamic_sink(client).build("docs_out", 0, 1)
        partition.write_batch([{"id": 1}])

        partition.close()

        assert client.close_calls == 1
        assert partition.context.closed
