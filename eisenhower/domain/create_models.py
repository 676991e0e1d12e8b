"""Pydantic models for creating records in database."""

from pydantic import BaseModel, Field


class TaskCreate(BaseModel):
    """Payload for the add-task action.

    Title and bucket are validated by the task service so that bad input
    surfaces as a ValidationError rather than a schema error.
    """

    title: str = Field(..., description="Task title")
    bucket: str = Field(..., description="Target column")
