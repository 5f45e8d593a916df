from pydantic import BaseModel
from typing import Optional

TITLE_MAX_LENGTH = 255


class TaskCreate(BaseModel):
    """Schema for creating new tasks.

    ``title`` is optional here so that a missing title reaches the route and
    gets the same answer as a blank one.
    """
    title: Optional[str] = None
    description: Optional[str] = None


class Task(BaseModel):
    """Task as returned by the API."""
    id: int
    title: str
    description: Optional[str] = None
    is_completed: bool = False

    class Config:
        from_attributes = True


class TaskCompleteResponse(BaseModel):
    message: str = "Task marked as complete"


class ErrorResponse(BaseModel):
    """Body of every error response."""
    message: str
