import redis
from contextlib import contextmanager
from typing import Generator, Iterator

from redtask.config import get_settings
from redtask.exceptions import StoreUnavailable
from redtask.logging_config import get_logger
from redtask.services.store import EntityStore

logger = get_logger(__name__)


def create_client(url: str | None = None) -> redis.Redis:
    """Build a Redis client for ``url`` (defaults to the configured one)."""
    settings = get_settings()
    return redis.Redis.from_url(
        url or settings.redis_url,
        decode_responses=True,
        socket_timeout=settings.socket_timeout,
        socket_connect_timeout=settings.socket_timeout,
    )


@contextmanager
def redis_client(url: str | None = None) -> Iterator[redis.Redis]:
    """
    Open one client for the duration of a command and close it afterwards.

    The server is pinged up front so an unreachable store fails the command
    before any work is done.
    """
    client = create_client(url)
    try:
        try:
            client.ping()
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as exc:
            raise StoreUnavailable(str(exc)) from exc
        logger.debug(f"Connected to {client.connection_pool.connection_kwargs.get('host', 'redis')}")
        yield client
    finally:
        client.close()


def get_store() -> Generator[EntityStore, None, None]:
    """Dependency for getting a per-request entity store."""
    with redis_client() as client:
        yield EntityStore(client)
