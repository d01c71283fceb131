#!/usr/bin/env python3
"""
Seed script to fill a Redis store with projects and tasks.

Useful for eyeballing the CLI output and for timing prefix scans on a
store with many keys.

Usage:
    python -m scripts.seed [--tasks 500] [--projects 5] [--clear]

Options:
    --tasks N       Number of tasks to create (default: 500)
    --projects N    Number of projects to create (default: 5)
    --done-ratio R  Fraction of tasks to mark complete (default: 0.3)
    --clear         Remove existing redtask keys before seeding
"""

import argparse
import random
import time

from redtask.database import redis_client
from redtask.keyspace import COUNTER_PREFIX, Kind, kind_pattern
from redtask.schemas import TaskCreate
from redtask.services import projects as project_service
from redtask.services import tasks as task_service
from redtask.services.store import EntityStore

WORDS = [
    "write", "review", "fix", "plan", "email", "refactor", "ship", "test",
    "report", "budget", "backlog", "release", "docs", "meeting", "invoice",
]
PRIORITIES = ["now", "high", "low", None]
TAGS = ["work", "home", "urgent", "q1", "later", "ops"]


def clear_data(store: EntityStore) -> None:
    """Remove every entity and counter key."""
    print("Clearing existing data...")
    patterns = [kind_pattern(kind) for kind in Kind] + [f"{COUNTER_PREFIX}:*"]
    removed = 0
    for pattern in patterns:
        for key in list(store.client.scan_iter(match=pattern)):
            removed += store.delete(key)
    print(f"Removed {removed} keys.")


def create_projects(store: EntityStore, count: int) -> list[str]:
    shortcodes = []
    for i in range(count):
        shortcode = f"p{i + 1}"
        if project_service.find_project_by_shortcode(store, shortcode) is None:
            project_service.create_project(
                store, f"Project {i + 1}", shortcode, description="Seeded project"
            )
        shortcodes.append(shortcode)
    return shortcodes


def random_due() -> str | None:
    if random.random() < 0.5:
        return None
    return f"{random.randint(1, 28):02d}/{random.randint(1, 12):02d}/2026"


def create_tasks(store: EntityStore, count: int, shortcodes: list[str], done_ratio: float) -> None:
    for _ in range(count):
        task = task_service.create_task(
            store,
            TaskCreate(
                text=" ".join(random.sample(WORDS, 3)).capitalize(),
                priority=random.choice(PRIORITIES),
                due=random_due(),
                tags=",".join(random.sample(TAGS, random.randint(0, 2))),
                project=random.choice(shortcodes) if shortcodes and random.random() < 0.7 else None,
            ),
        )
        if random.random() < done_ratio:
            task_service.complete_task(store, task.id)


def main():
    parser = argparse.ArgumentParser(description="Seed the store with projects and tasks")
    parser.add_argument("--tasks", type=int, default=500, help="Number of tasks to create")
    parser.add_argument("--projects", type=int, default=5, help="Number of projects to create")
    parser.add_argument("--done-ratio", type=float, default=0.3, help="Fraction of tasks to complete")
    parser.add_argument("--clear", action="store_true", help="Clear existing data first")
    parser.add_argument("--redis-url", default=None, help="Override the configured Redis URL")

    args = parser.parse_args()

    print("=== redtask Seed Script ===")

    with redis_client(args.redis_url) as client:
        store = EntityStore(client)

        if args.clear:
            clear_data(store)

        shortcodes = create_projects(store, args.projects)
        print(f"Projects: {', '.join(shortcodes) or '(none)'}")

        start_time = time.time()
        create_tasks(store, args.tasks, shortcodes, args.done_ratio)
        print(f"Insert time: {time.time() - start_time:.2f}s")

        start_time = time.time()
        open_tasks = task_service.list_tasks(store)
        print(f"List time:   {time.time() - start_time:.2f}s")

        print("\n=== Store Statistics ===")
        print(f"Keys:        {store.count()}")
        print(f"Open tasks:  {len(open_tasks)}")
        print(f"All tasks:   {len(task_service.list_tasks(store, include_done=True))}")

    print("\n=== Seeding Complete ===")


if __name__ == "__main__":
    main()
