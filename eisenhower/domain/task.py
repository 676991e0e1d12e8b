"""Task domain models and enums."""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field

from eisenhower.core.errors import ValidationError


class Quadrant(StrEnum):
    """Eisenhower quadrant: a task's home column (its task_type)."""

    URGENT_IMPORTANT = "UrgentImportant"
    URGENT_NOT_IMPORTANT = "UrgentNotImportant"
    NOT_URGENT_IMPORTANT = "NotUrgentImportant"
    NOT_URGENT_NOT_IMPORTANT = "NotUrgentNotImportant"

    @property
    def color(self) -> str:
        """CSS colour key used by the board."""
        return _QUADRANT_COLORS[self]


_QUADRANT_COLORS = {
    Quadrant.URGENT_IMPORTANT: "color-UI",
    Quadrant.URGENT_NOT_IMPORTANT: "color-UNI",
    Quadrant.NOT_URGENT_IMPORTANT: "color-NUI",
    Quadrant.NOT_URGENT_NOT_IMPORTANT: "color-NUN",
}


class Bucket(StrEnum):
    """Column a task currently sits in: one of the quadrants or Today."""

    URGENT_IMPORTANT = "UrgentImportant"
    URGENT_NOT_IMPORTANT = "UrgentNotImportant"
    NOT_URGENT_IMPORTANT = "NotUrgentImportant"
    NOT_URGENT_NOT_IMPORTANT = "NotUrgentNotImportant"
    TODAY = "Today"

    @classmethod
    def parse(cls, value: str) -> "Bucket":
        """Parse a bucket name, raising ValidationError for unknown values."""
        try:
            return cls(value)
        except ValueError as e:
            msg = f"Unrecognized bucket: {value!r}"
            raise ValidationError(msg) from e

    @property
    def quadrant(self) -> Quadrant | None:
        """Quadrant with the same name, or None for Today."""
        if self is Bucket.TODAY:
            return None
        return Quadrant(self.value)

    @classmethod
    def home_of(cls, quadrant: Quadrant) -> "Bucket":
        """Bucket that is the home column of a quadrant."""
        return cls(quadrant.value)


# Board column order, left to right
BOARD_COLUMNS = (
    Bucket.URGENT_IMPORTANT,
    Bucket.URGENT_NOT_IMPORTANT,
    Bucket.TODAY,
    Bucket.NOT_URGENT_IMPORTANT,
    Bucket.NOT_URGENT_NOT_IMPORTANT,
)

COLUMN_TITLES = {
    Bucket.URGENT_IMPORTANT: "Urgent & Important",
    Bucket.URGENT_NOT_IMPORTANT: "Urgent & Not Important",
    Bucket.TODAY: "Today's Tasks",
    Bucket.NOT_URGENT_IMPORTANT: "Not Urgent & Important",
    Bucket.NOT_URGENT_NOT_IMPORTANT: "Not Urgent & Not Important",
}


def task_type_for_new_task(bucket: Bucket) -> Quadrant:
    """Origin quadrant for a task created directly in ``bucket``.

    Today has no quadrant of its own; tasks added there default to
    Urgent & Important.
    """
    return bucket.quadrant or Quadrant.URGENT_IMPORTANT


class Task(BaseModel):
    """Task data transfer object."""

    id: int = Field(..., description="Unique task ID, never reused")
    title: str = Field(..., description="Task title (trimmed, non-empty)")
    task_type: Quadrant = Field(..., description="Origin quadrant, used to send the task home")
    bucket: Bucket = Field(..., description="Column the task currently sits in")
    completed: bool = Field(default=False, description="Whether the task is in the completed list")
    position: int = Field(..., description="Rank within the bucket's active ordering")
    created_at: str = Field(..., description="Creation timestamp (ISO format)")
    updated_at: str = Field(..., description="Last mutation timestamp (ISO format)")

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Task":
        """Build a Task from a ``tasks`` table row."""
        return cls(
            id=row["id"],
            title=row["title"],
            task_type=Quadrant(row["task_type"]),
            bucket=Bucket(row["bucket"]),
            completed=bool(row["completed"]),
            position=row["position"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    @property
    def color(self) -> str:
        """Colour key: the current quadrant, or the origin quadrant while in Today."""
        return (self.bucket.quadrant or self.task_type).color


class Board(BaseModel):
    """Full board state: five ordered active columns plus the completed list."""

    columns: dict[Bucket, list[Task]] = Field(default_factory=lambda: {bucket: [] for bucket in BOARD_COLUMNS})
    completed: list[Task] = Field(default_factory=list)
