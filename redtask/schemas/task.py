from pydantic import BaseModel, Field


class TaskCreate(BaseModel):
    """
    Schema for creating a new task.

    Fields arrive as raw user strings; the service applies the defaults
    (unknown priority -> Low, unparseable due date -> none).
    """
    text: str = Field(min_length=1)
    priority: str | None = None
    due: str | None = None  # DD/MM/YYYY
    tags: str | None = None  # comma-separated
    project: str | None = None  # project shortcode
