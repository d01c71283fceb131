"""
Tests for client construction and the per-command connection scope.
"""

import pytest

from redtask.database import create_client, redis_client
from redtask.exceptions import StoreUnavailable


def test_create_client_uses_url():
    client = create_client("redis://example.internal:6390/3")
    kwargs = client.connection_pool.connection_kwargs
    assert kwargs["host"] == "example.internal"
    assert kwargs["port"] == 6390
    assert kwargs["db"] == 3
    assert kwargs["decode_responses"] is True
    client.close()


def test_unreachable_store_raises_store_unavailable():
    # Nothing listens on port 1.
    with pytest.raises(StoreUnavailable):
        with redis_client("redis://127.0.0.1:1/0"):
            pass
