"""
Tests for per-kind id allocation.

Ids come from an atomic counter, so they are unique and strictly
increasing within a kind, independent of how many other keys exist.
"""

import uuid

from redtask.keyspace import Kind, counter_key, entity_key
from redtask.models import Project, Task
from redtask.services import allocator


class TestNextId:

    def test_starts_at_one(self, store):
        assert allocator.current_id(store, Kind.TASK) == 0
        assert allocator.next_id(store, Kind.TASK) == 1
        assert allocator.current_id(store, Kind.TASK) == 1

    def test_unique_and_increasing(self, store):
        ids = [allocator.next_id(store, Kind.TASK) for _ in range(50)]
        assert ids == sorted(ids)
        assert len(set(ids)) == 50

    def test_other_kinds_do_not_shift_ids(self, store):
        """Projects and counters in the store must not inflate task ids."""
        for i in range(3):
            p = Project(name=f"p{i}", shortcode=f"p{i}")
            store.put(Kind.PROJECT, p.uuid, p)
        assert allocator.next_id(store, Kind.TASK) == 1

    def test_kinds_have_independent_counters(self, store):
        allocator.next_id(store, Kind.TASK)
        allocator.next_id(store, Kind.TASK)
        assert allocator.next_id(store, Kind.PROJECT) == 1


class TestSeeding:

    def test_seeds_from_existing_records(self, store, fake_redis):
        """A store written before the counter existed continues after its highest id."""
        for task_id in (2, 7, 5):
            t = Task(id=task_id, text="legacy")
            store.put(Kind.TASK, t.uuid, t)
        assert counter_key(Kind.TASK) not in fake_redis.data

        assert allocator.next_id(store, Kind.TASK) == 8

    def test_existing_counter_is_kept(self, store, fake_redis):
        fake_redis.data[counter_key(Kind.TASK)] = "41"
        t = Task(id=3, text="old")
        store.put(Kind.TASK, t.uuid, t)

        assert allocator.next_id(store, Kind.TASK) == 42

    def test_boolean_ids_ignored_when_seeding(self, store, fake_redis):
        fake_redis.data[entity_key(Kind.TASK, uuid.uuid4())] = '{"id": true}'
        assert allocator.next_id(store, Kind.TASK) == 1

    def test_corrupt_records_ignored_when_seeding(self, store, fake_redis):
        fake_redis.data[entity_key(Kind.TASK, uuid.uuid4())] = "]]"
        fake_redis.data[entity_key(Kind.TASK, uuid.uuid4())] = '{"id": "seven"}'
        assert allocator.next_id(store, Kind.TASK) == 1
