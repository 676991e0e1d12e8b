"""Domain models and DTOs."""

from eisenhower.domain.create_models import TaskCreate
from eisenhower.domain.task import BOARD_COLUMNS, Board, Bucket, Quadrant, Task
from eisenhower.domain.update_models import BucketReorder, TaskMove, TaskTitleUpdate


__all__ = [
    "BOARD_COLUMNS",
    "Board",
    "Bucket",
    "BucketReorder",
    "Quadrant",
    "Task",
    "TaskCreate",
    "TaskMove",
    "TaskTitleUpdate",
]
