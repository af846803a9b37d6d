# ==============================================================================
# Test Doubles
# ==============================================================================
"""
In-memory stand-ins shared by the test modules.

Provides:
- FakeBulkClient: records bulk calls and replays scripted outcomes
- FakeClientConfig: connection config that hands out a FakeBulkClient
- Result and request factories
"""

from collections import deque

from searchsink.base.capabilities import BulkClient, ClientConfig
from searchsink.core.models import BulkBuffer, BulkItemFailure, BulkResult, IndexRequest, WriteOptions


class FakeBulkClient(BulkClient):
    """Records every bulk call and replays scripted outcomes.

    Each entry in ``outcomes`` is either a BulkResult or an exception to raise.
    When the script is exhausted every call succeeds.
    """

    def __init__(self, outcomes=None):
        self.outcomes = deque(outcomes or [])
        self.calls = []
        self.buffers = []
        self.close_calls = 0

    def bulk(self, buffer: BulkBuffer, options: WriteOptions) -> BulkResult:
        # Snapshot: the same buffer instance may grow after a failed flush
        self.calls.append((tuple(buffer.requests), options))
        self.buffers.append(buffer)
        if self.outcomes:
            outcome = self.outcomes.popleft()
            if isinstance(outcome, Exception):
                raise outcome
            return outcome
        return success_result(len(buffer))

    def close(self) -> None:
        self.close_calls += 1

    @property
    def sent(self):
        """Requests of each bulk call, in call order."""
        return [requests for requests, _ in self.calls]


class FakeClientConfig(ClientConfig):
    def __init__(self, client: FakeBulkClient):
        self.client = client
        self.connect_calls = 0

    def connect(self) -> FakeBulkClient:
        self.connect_calls += 1
        return self.client


def success_result(items: int) -> BulkResult:
    return BulkResult(items=items, took_ms=3)


def failure_result(items: int, failed_positions=(0,)) -> BulkResult:
    failures = tuple(
        BulkItemFailure(
            position=position,
            op_type="index",
            index="docs",
            id=str(position),
            status=400,
            reason="mapper_parsing_exception: failed to parse",
        )
        for position in failed_positions
    )
    return BulkResult(items=items, took_ms=3, errors=True, failures=failures)


def make_request(n: int) -> IndexRequest:
    return IndexRequest(index="docs", id=str(n), source={"n": n})
