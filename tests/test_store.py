"""
Tests for the entity store over the in-memory Redis double.
"""

import logging
import uuid

import pytest

from redtask.exceptions import DecodeError, NotFound, StoreUnavailable
from redtask.keyspace import Kind, counter_key, entity_key
from redtask.models import Project, Task
from redtask.services.store import EntityStore


def task(task_id: int, **fields) -> Task:
    return Task(id=task_id, text=fields.pop("text", f"task {task_id}"), **fields)


class TestPutGet:

    def test_put_writes_at_uuid_key(self, store, fake_redis):
        t = task(1)
        key = store.put(Kind.TASK, t.uuid, t)
        assert key == f"task:{t.uuid}"
        assert key in fake_redis.data

    def test_put_overwrites(self, store):
        t = task(1)
        store.put(Kind.TASK, t.uuid, t)
        t.text = "changed"
        store.put(Kind.TASK, t.uuid, t)
        assert store.get(entity_key(Kind.TASK, t.uuid), Task).text == "changed"
        assert len(store.scan_keys(Kind.TASK)) == 1

    def test_get_missing_key(self, store):
        with pytest.raises(NotFound):
            store.get("task:00000000-0000-0000-0000-000000000000", Task)

    def test_get_entity_names_the_entity(self, store):
        missing = uuid.uuid4()
        with pytest.raises(NotFound) as exc_info:
            store.get_entity(Kind.PROJECT, missing, Project)
        assert exc_info.value.resource == "Project"
        assert exc_info.value.resource_id == str(missing)

    def test_get_corrupt_payload(self, store, fake_redis):
        key = entity_key(Kind.TASK, uuid.uuid4())
        fake_redis.data[key] = "{oops"
        with pytest.raises(DecodeError) as exc_info:
            store.get(key, Task)
        assert exc_info.value.key == key

    def test_get_wrong_kind_payload(self, store):
        project = Project(name="Home", shortcode="home")
        key = store.put(Kind.PROJECT, project.uuid, project)
        with pytest.raises(DecodeError):
            store.get(key, Task)


class TestScan:

    def test_scan_keys_is_prefix_only(self, store, fake_redis):
        t = task(1)
        p = Project(name="Home", shortcode="home")
        store.put(Kind.TASK, t.uuid, t)
        store.put(Kind.PROJECT, p.uuid, p)
        fake_redis.data[counter_key(Kind.TASK)] = "1"
        fake_redis.data["unrelated"] = "x"
        fake_redis.data["task:not-a-uuid"] = "x"

        assert store.scan_keys(Kind.TASK) == [f"task:{t.uuid}"]
        assert store.scan_keys(Kind.PROJECT) == [f"project:{p.uuid}"]

    def test_scan_keys_drops_repeated_scan_results(self, store, fake_redis):
        """SCAN may hand back the same key twice; each key is returned once."""
        tasks = [task(i) for i in range(1, 4)]
        for t in tasks:
            store.put(Kind.TASK, t.uuid, t)
        keys = list(fake_redis.data)
        fake_redis.scan_order = keys + list(reversed(keys))

        assert store.scan_keys(Kind.TASK) == keys
        assert sorted(r.id for r in store.scan(Kind.TASK, Task)) == [1, 2, 3]
        assert sorted(store.scan_field(Kind.TASK, "id")) == [1, 2, 3]

    def test_scan_skips_corrupt_records(self, store, fake_redis, caplog):
        good = task(1)
        store.put(Kind.TASK, good.uuid, good)
        bad_key = entity_key(Kind.TASK, uuid.uuid4())
        fake_redis.data[bad_key] = '{"id": "not-an-int"}'

        with caplog.at_level(logging.WARNING, logger="redtask"):
            records = store.scan(Kind.TASK, Task)

        assert [r.uuid for r in records] == [good.uuid]
        assert bad_key in caplog.text

    def test_scan_field_reads_without_full_schema(self, store, fake_redis):
        fake_redis.data[entity_key(Kind.TASK, uuid.uuid4())] = '{"id": 9}'
        t = task(3)
        store.put(Kind.TASK, t.uuid, t)
        assert sorted(store.scan_field(Kind.TASK, "id")) == [3, 9]


class TestScanByProperty:

    def test_finds_match(self, store):
        for i in range(1, 6):
            t = task(i)
            store.put(Kind.TASK, t.uuid, t)
        found = store.scan_by_property(Kind.TASK, "id", 4, Task)
        assert found is not None
        assert found.id == 4

    def test_no_match_is_none(self, store):
        t = task(1)
        store.put(Kind.TASK, t.uuid, t)
        assert store.scan_by_property(Kind.TASK, "id", 99, Task) is None

    def test_result_independent_of_scan_order(self, store, fake_redis):
        tasks = [task(i) for i in range(1, 5)]
        for t in tasks:
            store.put(Kind.TASK, t.uuid, t)

        fake_redis.scan_order = list(reversed(list(fake_redis.data)))
        assert store.scan_by_property(Kind.TASK, "id", 2, Task).uuid == tasks[1].uuid

    def test_only_searches_requested_kind(self, store):
        p = Project(name="Work", shortcode="w")
        store.put(Kind.PROJECT, p.uuid, p)
        assert store.scan_by_property(Kind.TASK, "uuid", p.uuid, Task) is None

    def test_unknown_property(self, store):
        with pytest.raises(AttributeError):
            store.scan_by_property(Kind.TASK, "colour", "red", Task)

    def test_find_first_with_accessor(self, store):
        t = task(1, tags=["home", "urgent"])
        store.put(Kind.TASK, t.uuid, t)
        found = store.find_first(Kind.TASK, Task, lambda r: "urgent" in r.tags, True)
        assert found.uuid == t.uuid


class TestDelete:
    """Deleting is idempotent: a missing key is not an error."""

    def test_delete_existing(self, store):
        t = task(1)
        key = store.put(Kind.TASK, t.uuid, t)
        assert store.delete(key) is True
        with pytest.raises(NotFound):
            store.get(key, Task)

    def test_delete_missing_is_noop(self, store):
        key = entity_key(Kind.TASK, uuid.uuid4())
        assert store.delete(key) is False
        assert store.delete(key) is False


class TestStoreUnavailable:

    @pytest.fixture
    def down_store(self, fake_redis):
        fake_redis.down = True
        return EntityStore(fake_redis)

    def test_put(self, down_store):
        t = task(1)
        with pytest.raises(StoreUnavailable):
            down_store.put(Kind.TASK, t.uuid, t)

    def test_get(self, down_store):
        with pytest.raises(StoreUnavailable):
            down_store.get("task:x", Task)

    def test_scan(self, down_store):
        with pytest.raises(StoreUnavailable):
            down_store.scan(Kind.TASK, Task)

    def test_delete(self, down_store):
        with pytest.raises(StoreUnavailable):
            down_store.delete("task:x")

    def test_count(self, down_store):
        with pytest.raises(StoreUnavailable):
            down_store.count()


def test_count_includes_every_key(store, fake_redis):
    t = task(1)
    store.put(Kind.TASK, t.uuid, t)
    fake_redis.data["counter:task"] = "1"
    assert store.count() == 2
