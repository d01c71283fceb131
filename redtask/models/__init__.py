from redtask.models.task import Priority, Task
from redtask.models.project import Project

__all__ = [
    "Priority",
    "Task",
    "Project",
]
