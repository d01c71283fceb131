"""
Keyspace layout for the Redis store.

Every entity lives at ``<kind>:<uuid>``. Id counters live under their
own ``counter:`` prefix so they never show up in an entity prefix scan.
"""

import uuid
from enum import Enum

SEPARATOR = ":"
COUNTER_PREFIX = "counter"


class Kind(str, Enum):
    """Category of entity; its value is the key prefix."""

    TASK = "task"
    PROJECT = "project"


def entity_key(kind: Kind, entity_uuid: uuid.UUID | str) -> str:
    """Store key for one entity, e.g. ``task:550e8400-...``."""
    return f"{kind.value}{SEPARATOR}{entity_uuid}"


def kind_pattern(kind: Kind) -> str:
    """Glob pattern matching every entity key of ``kind``."""
    return f"{kind.value}{SEPARATOR}*"


def counter_key(kind: Kind) -> str:
    return f"{COUNTER_PREFIX}{SEPARATOR}{kind.value}"


def parse_key(key: str) -> tuple[Kind, uuid.UUID]:
    """
    Split an entity key back into its kind and uuid.

    Raises ValueError for keys outside the entity namespace.
    """
    prefix, sep, rest = key.partition(SEPARATOR)
    if not sep:
        raise ValueError(f"Not an entity key: {key!r}")
    kind = Kind(prefix)
    return kind, uuid.UUID(rest)
