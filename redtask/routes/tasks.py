"""
Task routes for the redtask API.
"""

import uuid
from fastapi import APIRouter, Depends, Query, status

from redtask.database import get_store
from redtask.models import Task
from redtask.schemas import TaskCreate
from redtask.services import tasks as task_service
from redtask.services.store import EntityStore

router = APIRouter()


@router.post("/", response_model=Task, status_code=status.HTTP_201_CREATED)
def create_task(
    task_in: TaskCreate,
    store: EntityStore = Depends(get_store),
) -> Task:
    """
    Create a new task.

    Priority, due date and tags are parsed leniently; a project shortcode
    that does not resolve is a 404.
    """
    return task_service.create_task(store, task_in)


@router.get("/", response_model=list[Task])
def list_tasks(
    include_done: bool = Query(default=False, alias="all"),
    store: EntityStore = Depends(get_store),
) -> list[Task]:
    """List tasks ordered by id; pass ``all=true`` to include completed ones."""
    return task_service.list_tasks(store, include_done=include_done)


@router.get("/uuid/{task_uuid}", response_model=Task)
def get_task_by_uuid(
    task_uuid: uuid.UUID,
    store: EntityStore = Depends(get_store),
) -> Task:
    return task_service.get_task_by_uuid(store, task_uuid)


@router.get("/{task_id}", response_model=Task)
def get_task(
    task_id: int,
    store: EntityStore = Depends(get_store),
) -> Task:
    """Get a task by its sequential id."""
    return task_service.get_task(store, task_id)


@router.post("/{task_id}/complete", response_model=Task)
def complete_task(
    task_id: int,
    store: EntityStore = Depends(get_store),
) -> Task:
    """Mark a task done."""
    return task_service.complete_task(store, task_id)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: int,
    store: EntityStore = Depends(get_store),
) -> None:
    """Delete a task."""
    task_service.delete_task(store, task_id)
