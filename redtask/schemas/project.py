from pydantic import BaseModel, Field


class ProjectCreate(BaseModel):
    """Schema for creating a new project."""
    name: str = Field(min_length=1)
    shortcode: str = Field(min_length=1, max_length=16, pattern=r"^\S+$")
    description: str | None = None
