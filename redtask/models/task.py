from uuid import UUID, uuid4
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from redtask.models.base import utcnow


class Priority(str, Enum):
    NOW = "Now"
    HIGH = "High"
    LOW = "Low"


class Task(BaseModel):
    """
    Task record as stored at ``task:<uuid>``.

    Key fields:
    - id: Sequential per-kind number shown to the user; not the storage key
    - uuid: Primary storage key, never reused
    - project_id: Optional, non-owning reference to a Project uuid
    """

    id: int = Field(ge=1)
    uuid: UUID = Field(default_factory=uuid4)
    text: str
    priority: Priority = Priority.LOW
    done: bool = False
    tags: list[str] = Field(default_factory=list)
    due: datetime | None = None
    project_id: UUID | None = None

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
