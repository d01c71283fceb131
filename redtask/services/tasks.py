"""
Task lifecycle: create, complete, delete and list.

Tasks are stored under their uuid. The integer id the user types is
resolved with a prefix scan over ``task:*``; that is acceptable for a
personal tracker and keeps a single source of truth per task.

``complete_task`` and ``delete_task`` are read-then-write without a
transaction: a delete that lands between the scan and the write-back of
a completion brings the task back.
"""

from uuid import UUID, uuid4

from redtask.exceptions import NotFound
from redtask.keyspace import Kind, entity_key
from redtask.logging_config import get_logger
from redtask.models import Task
from redtask.models.base import utcnow
from redtask.schemas import TaskCreate
from redtask.services import allocator
from redtask.services.projects import get_project_by_shortcode
from redtask.services.store import EntityStore
from redtask.utils import get_due_or_default, get_priority_or_default, get_tags_or_default

logger = get_logger(__name__)


def create_task(store: EntityStore, task_in: TaskCreate) -> Task:
    """
    Create a new task.

    Missing or unrecognised priority falls back to Low, an unparseable
    due date to none, and missing tags to an empty list.
    """
    project_id = None
    if task_in.project:
        project_id = get_project_by_shortcode(store, task_in.project).uuid

    now = utcnow()
    task = Task(
        id=allocator.next_id(store, Kind.TASK),
        uuid=uuid4(),
        text=task_in.text,
        priority=get_priority_or_default(task_in.priority),
        due=get_due_or_default(task_in.due),
        tags=get_tags_or_default(task_in.tags),
        project_id=project_id,
        done=False,
        created_at=now,
        updated_at=now,
    )
    store.put(Kind.TASK, task.uuid, task)

    logger.info(f"Created task: id={task.id} uuid={task.uuid} priority={task.priority.value}")

    return task


def find_task(store: EntityStore, task_id: int) -> Task | None:
    return store.scan_by_property(Kind.TASK, "id", task_id, Task)


def get_task(store: EntityStore, task_id: int) -> Task:
    """Get a task by its sequential id."""
    task = find_task(store, task_id)
    if task is None:
        raise NotFound("Task", str(task_id))
    return task


def get_task_by_uuid(store: EntityStore, task_uuid: UUID) -> Task:
    return store.get_entity(Kind.TASK, task_uuid, Task)


def complete_task(store: EntityStore, task_id: int) -> Task:
    """Mark a task done and write it back at the same key."""
    task = get_task(store, task_id)

    task.done = True
    task.updated_at = utcnow()
    store.put(Kind.TASK, task.uuid, task)

    logger.info(f"Completed task {task.id}")

    return task


def delete_task(store: EntityStore, task_id: int) -> Task:
    """Remove a task; its id and uuid are never reused."""
    task = get_task(store, task_id)
    store.delete(entity_key(Kind.TASK, task.uuid))

    logger.info(f"Deleted task {task.id} ({task.uuid})")

    return task


def list_tasks(store: EntityStore, include_done: bool = False) -> list[Task]:
    """
    List tasks sorted ascending by id.

    Completed tasks are left out unless ``include_done`` is set.
    """
    tasks = [
        task
        for task in store.iter_records(Kind.TASK, Task)
        if include_done or not task.done
    ]
    tasks.sort(key=lambda t: t.id)

    logger.debug(f"Listed {len(tasks)} tasks (include_done={include_done})")

    return tasks
