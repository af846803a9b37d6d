# ==============================================================================
# Shared Test Fixtures
# ==============================================================================
"""
Pytest fixtures shared across all test modules.

Provides:
- A FakeBulkClient that succeeds unless outcomes are scripted
- A ready-to-use BulkContext owning that client
"""

import pytest

from fakes import FakeBulkClient
from searchsink.core.bulk_context import BulkContext
from searchsink.core.models import BulkBuffer, WriteOptions


@pytest.fixture()
def fake_client():
    """A FakeBulkClient that succeeds unless outcomes are scripted."""
    return FakeBulkClient()


@pytest.fixture()
def context(fake_client):
    """A BulkContext owning fake_client with default buffer and options."""
    return BulkContext(fake_client, BulkBuffer, lambda buffer: WriteOptions.DEFAULT)
