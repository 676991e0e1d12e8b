"""Update models for database operations."""

from pydantic import BaseModel, ConfigDict, Field


class TaskTitleUpdate(BaseModel):
    """Update payload for a task title."""

    title: str


class TaskMove(BaseModel):
    """A single drag-and-drop gesture: put task ``id`` at ``index`` of ``bucket``."""

    id: int
    bucket: str
    index: int | None = Field(default=None, description="Target index; omitted means append")


class BucketReorder(BaseModel):
    """Client-side ordering of one bucket's active tasks."""

    model_config = ConfigDict(populate_by_name=True)

    bucket: str
    ordered_ids: list[int] = Field(..., alias="orderedIds")
