"""
Project lifecycle: create, look up, list and delete.

Deleting a project leaves its tasks alone; their ``project_id`` simply
stops resolving.
"""

from uuid import UUID, uuid4

from redtask.exceptions import DuplicateShortcode, NotFound
from redtask.keyspace import Kind, entity_key
from redtask.logging_config import get_logger
from redtask.models import Project
from redtask.models.base import utcnow
from redtask.services.store import EntityStore

logger = get_logger(__name__)


def find_project_by_shortcode(store: EntityStore, shortcode: str) -> Project | None:
    return store.scan_by_property(Kind.PROJECT, "shortcode", shortcode, Project)


def get_project_by_shortcode(store: EntityStore, shortcode: str) -> Project:
    project = find_project_by_shortcode(store, shortcode)
    if project is None:
        raise NotFound("Project", shortcode)
    return project


def get_project_by_uuid(store: EntityStore, project_uuid: UUID) -> Project:
    return store.get_entity(Kind.PROJECT, project_uuid, Project)


def create_project(
    store: EntityStore,
    name: str,
    shortcode: str,
    description: str | None = None,
) -> Project:
    """
    Create a new project.

    The shortcode check is a scan followed by a write, so two processes
    racing on the same shortcode can both succeed.
    """
    if find_project_by_shortcode(store, shortcode) is not None:
        raise DuplicateShortcode(shortcode)

    now = utcnow()
    project = Project(
        uuid=uuid4(),
        name=name,
        shortcode=shortcode,
        description=description,
        created_at=now,
        updated_at=now,
    )
    store.put(Kind.PROJECT, project.uuid, project)

    logger.info(f"Created project: uuid={project.uuid} shortcode='{project.shortcode}'")

    return project


def list_projects(store: EntityStore) -> list[Project]:
    """All projects, sorted by name."""
    projects = store.scan(Kind.PROJECT, Project)
    projects.sort(key=lambda p: (p.name, str(p.uuid)))

    logger.debug(f"Listed {len(projects)} projects")

    return projects


def delete_project(store: EntityStore, project_uuid: UUID) -> Project:
    """Delete a project (tasks are not touched)."""
    project = get_project_by_uuid(store, project_uuid)
    store.delete(entity_key(Kind.PROJECT, project.uuid))

    logger.info(f"Deleted project {project.uuid}: '{project.name}'")

    return project
