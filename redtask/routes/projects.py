"""
Project routes for the redtask API.
"""

import uuid
from fastapi import APIRouter, Depends, status

from redtask.database import get_store
from redtask.models import Project
from redtask.schemas import ProjectCreate
from redtask.services import projects as project_service
from redtask.services.store import EntityStore

router = APIRouter()


@router.post("/", response_model=Project, status_code=status.HTTP_201_CREATED)
def create_project(
    project_in: ProjectCreate,
    store: EntityStore = Depends(get_store),
) -> Project:
    """Create a new project. Shortcodes must be unique."""
    return project_service.create_project(
        store,
        name=project_in.name,
        shortcode=project_in.shortcode,
        description=project_in.description,
    )


@router.get("/", response_model=list[Project])
def list_projects(
    store: EntityStore = Depends(get_store),
) -> list[Project]:
    """List all projects, sorted by name."""
    return project_service.list_projects(store)


@router.get("/{project_uuid}", response_model=Project)
def get_project(
    project_uuid: uuid.UUID,
    store: EntityStore = Depends(get_store),
) -> Project:
    """Get a project by uuid."""
    return project_service.get_project_by_uuid(store, project_uuid)


@router.delete("/{project_uuid}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(
    project_uuid: uuid.UUID,
    store: EntityStore = Depends(get_store),
) -> None:
    """Delete a project. Its tasks keep their (now dangling) project_id."""
    project_service.delete_project(store, project_uuid)
