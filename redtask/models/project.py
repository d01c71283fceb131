from uuid import UUID, uuid4
from datetime import datetime

from pydantic import BaseModel, Field

from redtask.models.base import utcnow


class Project(BaseModel):
    """Project record - groups tasks under a short human-facing code."""

    uuid: UUID = Field(default_factory=uuid4)
    name: str
    shortcode: str
    description: str | None = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
