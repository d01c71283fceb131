from redtask.schemas.project import ProjectCreate
from redtask.schemas.task import TaskCreate

__all__ = [
    "ProjectCreate",
    "TaskCreate",
]
