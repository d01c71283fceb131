"""
Entity store: typed put/get/scan/delete over a raw Redis client.

The store has no secondary indexes. Lookups by anything other than the
uuid are prefix scans over ``<kind>:*``, so their cost grows with the
number of keys in the store, not with the number of matches.
"""

from contextlib import contextmanager
from operator import attrgetter
from typing import Any, Callable, Iterator, TypeVar
from uuid import UUID

import redis
from pydantic import BaseModel

from redtask import codec
from redtask.exceptions import DecodeError, EncodeError, NotFound, StoreUnavailable
from redtask.keyspace import Kind, entity_key, kind_pattern, parse_key
from redtask.logging_config import get_logger

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

SCAN_COUNT = 500


@contextmanager
def store_errors() -> Iterator[None]:
    """Translate transport failures into StoreUnavailable."""
    try:
        yield
    except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as exc:
        raise StoreUnavailable(str(exc)) from exc


class EntityStore:
    """Generic record persistence keyed by the keyspace scheme."""

    def __init__(self, client: redis.Redis):
        self.client = client

    # -------------------- writes --------------------

    def put(self, kind: Kind, entity_uuid: UUID | str, value: BaseModel) -> str:
        """Serialize ``value`` and write it at ``<kind>:<uuid>``, overwriting."""
        try:
            payload = codec.encode(value)
        except codec.PayloadError as exc:
            raise EncodeError(str(exc)) from exc

        key = entity_key(kind, entity_uuid)
        with store_errors():
            self.client.set(key, payload)
        logger.debug(f"SET {key}")
        return key

    def delete(self, key: str) -> bool:
        """
        Remove ``key``.

        Idempotent: returns False instead of raising when the key was
        already gone.
        """
        with store_errors():
            removed = self.client.delete(key)
        logger.debug(f"DEL {key} removed={removed}")
        return bool(removed)

    # -------------------- reads --------------------

    def get(self, key: str, model: type[ModelT]) -> ModelT:
        with store_errors():
            payload = self.client.get(key)
        if payload is None:
            raise NotFound("Key", key)
        try:
            return codec.decode(payload, model)
        except codec.PayloadError as exc:
            raise DecodeError(key, str(exc)) from exc

    def get_entity(self, kind: Kind, entity_uuid: UUID | str, model: type[ModelT]) -> ModelT:
        """Fetch one entity by uuid; NotFound names the entity, not the key."""
        try:
            return self.get(entity_key(kind, entity_uuid), model)
        except NotFound:
            raise NotFound(kind.value.capitalize(), str(entity_uuid)) from None

    def scan_keys(self, kind: Kind) -> list[str]:
        """Every key under ``kind``'s prefix, in the store's (arbitrary) order."""
        with store_errors():
            matched = list(self.client.scan_iter(match=kind_pattern(kind), count=SCAN_COUNT))
        keys = []
        # SCAN may return a key more than once; keep the first occurrence.
        for key in dict.fromkeys(matched):
            try:
                parse_key(key)
            except ValueError:
                logger.debug(f"Ignoring non-entity key {key}")
                continue
            keys.append(key)
        return keys

    def iter_records(self, kind: Kind, model: type[ModelT]) -> Iterator[ModelT]:
        """
        Yield every decodable record of ``kind``.

        Corrupt records are logged and skipped; keys deleted between the
        scan and the read are skipped silently.
        """
        for key in self.scan_keys(kind):
            try:
                yield self.get(key, model)
            except NotFound:
                continue
            except DecodeError as exc:
                logger.warning(f"Skipping corrupt record {key}: {exc.reason}")

    def scan(self, kind: Kind, model: type[ModelT]) -> list[ModelT]:
        return list(self.iter_records(kind, model))

    def scan_field(self, kind: Kind, property_name: str) -> list[Any]:
        """
        Read one named field from every record of ``kind`` without
        validating the rest of the payload.
        """
        values = []
        for key in self.scan_keys(kind):
            with store_errors():
                payload = self.client.get(key)
            if payload is None:
                continue
            try:
                raw = codec.decode_raw(payload)
            except codec.PayloadError as exc:
                logger.warning(f"Skipping corrupt record {key}: {exc}")
                continue
            if property_name in raw:
                values.append(raw[property_name])
        return values

    def find_first(
        self,
        kind: Kind,
        model: type[ModelT],
        accessor: Callable[[ModelT], Any],
        expected: Any,
    ) -> ModelT | None:
        """
        Return the first record for which ``accessor(record) == expected``.

        "First" follows the scan order, which Redis does not define; callers
        must only rely on it when the matched value is unique.
        """
        for record in self.iter_records(kind, model):
            if accessor(record) == expected:
                return record
        return None

    def scan_by_property(
        self,
        kind: Kind,
        property_name: str,
        expected_value: Any,
        model: type[ModelT],
    ) -> ModelT | None:
        """Linear scan for the record whose ``property_name`` equals ``expected_value``."""
        if property_name not in model.model_fields:
            raise AttributeError(f"{model.__name__} has no field {property_name!r}")
        return self.find_first(kind, model, attrgetter(property_name), expected_value)

    def count(self) -> int:
        """Total number of keys in the store (all kinds, counters included)."""
        with store_errors():
            return int(self.client.dbsize())
