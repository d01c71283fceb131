"""
Pytest configuration and fixtures for redtask tests.

Tests run against ``FakeRedis``, an in-memory stand-in that implements the
handful of Redis commands the store uses.
"""

import fnmatch
from contextlib import contextmanager

import pytest
import pytest_asyncio
import redis
from httpx import AsyncClient, ASGITransport

from redtask.database import get_store
from redtask.main import app
from redtask.services.store import EntityStore, store_errors


class FakeRedis:
    """Dict-backed double for the subset of redis.Redis used by redtask."""

    def __init__(self):
        self.data: dict[str, str] = {}
        self.down = False
        self.closed = False
        self.scan_order: list[str] | None = None

    def _check(self):
        if self.down:
            raise redis.exceptions.ConnectionError("Error 111 connecting to localhost:6379. Connection refused.")

    def ping(self):
        self._check()
        return True

    def set(self, key, value, nx=False):
        self._check()
        if nx and key in self.data:
            return None
        self.data[key] = str(value)
        return True

    def get(self, key):
        self._check()
        return self.data.get(key)

    def delete(self, *keys):
        self._check()
        removed = 0
        for key in keys:
            if self.data.pop(key, None) is not None:
                removed += 1
        return removed

    def exists(self, *keys):
        self._check()
        return sum(1 for key in keys if key in self.data)

    def incr(self, key):
        self._check()
        value = int(self.data.get(key, 0)) + 1
        self.data[key] = str(value)
        return value

    def scan_iter(self, match=None, count=None):
        self._check()
        keys = list(self.scan_order) if self.scan_order is not None else list(self.data)
        for key in keys:
            if key in self.data and (match is None or fnmatch.fnmatchcase(key, match)):
                yield key

    def dbsize(self):
        self._check()
        return len(self.data)

    def close(self):
        self.closed = True


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def store(fake_redis):
    return EntityStore(fake_redis)


@pytest.fixture
def fake_redis_client(fake_redis, monkeypatch):
    """Patch the CLI's connection factory to hand out ``fake_redis``."""

    @contextmanager
    def _client(url=None):
        with store_errors():
            fake_redis.ping()
        yield fake_redis

    monkeypatch.setattr("redtask.cli.redis_client", _client)
    return fake_redis


@pytest_asyncio.fixture
async def client(store):
    """Create an async test client wired to the in-memory store."""

    def override_get_store():
        yield store

    app.dependency_overrides[get_store] = override_get_store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
