"""
Identity allocator for per-kind sequential ids.

Ids come from an atomic ``INCR`` on ``counter:<kind>``, so two processes
creating tasks at the same moment still get distinct ids. Deleted ids
are never handed out again.
"""

from redtask.keyspace import Kind, counter_key
from redtask.logging_config import get_logger
from redtask.services.store import EntityStore, store_errors

logger = get_logger(__name__)


def _highest_stored_id(store: EntityStore, kind: Kind) -> int:
    ids = [
        value
        for value in store.scan_field(kind, "id")
        if isinstance(value, int) and not isinstance(value, bool)
    ]
    return max(ids, default=0)


def ensure_counter(store: EntityStore, kind: Kind) -> None:
    """
    Seed a missing counter from the records already in the store.

    ``SET NX`` keeps a counter that another process seeded first.
    """
    key = counter_key(kind)
    with store_errors():
        if store.client.exists(key):
            return
    highest = _highest_stored_id(store, kind)
    with store_errors():
        seeded = store.client.set(key, highest, nx=True)
    if seeded:
        logger.info(f"Seeded {key} at {highest}")


def next_id(store: EntityStore, kind: Kind) -> int:
    """Allocate the next id for ``kind``."""
    ensure_counter(store, kind)
    with store_errors():
        allocated = int(store.client.incr(counter_key(kind)))
    logger.debug(f"Allocated {kind.value} id={allocated}")
    return allocated


def current_id(store: EntityStore, kind: Kind) -> int:
    """Last id handed out for ``kind`` (0 when none)."""
    with store_errors():
        value = store.client.get(counter_key(kind))
    return int(value) if value is not None else 0
