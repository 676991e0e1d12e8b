"""Per-bucket task ordering (dense-shift scheme).

Active (non-completed) tasks of a bucket always hold positions ``1..n``.
Every operation that touches a bucket rewrites its positions densely, so
ties are impossible and the ``(bucket, position)`` order is exactly the
order the user last arranged. Completed tasks keep their last bucket and
position but are ignored by every computation here.

All functions take an open connection and must run inside
``db_client.transaction()`` so that each move is atomic across the
buckets it touches.
"""

import logging
from typing import NamedTuple

import aiosqlite

from eisenhower.core import db_client
from eisenhower.core.errors import ValidationError
from eisenhower.domain.task import Bucket, Quadrant, Task


logger = logging.getLogger(__name__)


class Placement(NamedTuple):
    """Where a task ends up after a move."""

    bucket: Bucket
    task_type: Quadrant
    position: int


async def active_ids(conn: aiosqlite.Connection, bucket: Bucket, *, exclude: int | None = None) -> list[int]:
    """Ids of the bucket's active tasks in display order."""
    rows = await db_client.fetch_all(
        conn,
        "SELECT id FROM tasks WHERE bucket = ? AND completed = 0 ORDER BY position ASC, id ASC",
        (bucket.value,),
    )
    return [row["id"] for row in rows if row["id"] != exclude]


async def _write_positions(conn: aiosqlite.Connection, ordered_ids: list[int]) -> None:
    await conn.executemany(
        "UPDATE tasks SET position = ? WHERE id = ?",
        [(position, task_id) for position, task_id in enumerate(ordered_ids, start=1)],
    )


def clamp_index(index: int | None, length: int) -> int:
    """Resolve a requested insertion index; None or past-the-end means append."""
    if index is None or index > length:
        return length
    if index < 0:
        msg = f"Index must not be negative: {index}"
        raise ValidationError(msg)
    return index


async def next_position(conn: aiosqlite.Connection, bucket: Bucket) -> int:
    """Position that appends a task to the end of the bucket's active order."""
    row = await db_client.fetch_one(
        conn,
        "SELECT COALESCE(MAX(position), 0) + 1 AS next_position FROM tasks WHERE bucket = ? AND completed = 0",
        (bucket.value,),
    )
    return row["next_position"] if row else 1


async def reindex(conn: aiosqlite.Connection, bucket: Bucket) -> list[int]:
    """Normalize the bucket's active positions to ``1..n`` and return the order."""
    ordered = await active_ids(conn, bucket)
    await _write_positions(conn, ordered)
    return ordered


async def insert(conn: aiosqlite.Connection, *, task_id: int, bucket: Bucket, index: int | None) -> int:
    """Place ``task_id`` at ``index`` of the bucket, shifting later tasks down.

    The caller is responsible for the task's ``bucket`` column; only
    positions are written here. Returns the task's new position.
    """
    ordered = await active_ids(conn, bucket, exclude=task_id)
    slot = clamp_index(index, len(ordered))
    ordered.insert(slot, task_id)
    await _write_positions(conn, ordered)
    return slot + 1


async def remove(conn: aiosqlite.Connection, *, task_id: int, bucket: Bucket) -> None:
    """Take ``task_id`` out of the bucket's order and close the gap."""
    ordered = await active_ids(conn, bucket, exclude=task_id)
    await _write_positions(conn, ordered)


async def move(conn: aiosqlite.Connection, *, task: Task, target_bucket: Bucket, target_index: int | None) -> Placement:
    """Move an active task to ``target_index`` of ``target_bucket``.

    Dropping into Today keeps the origin quadrant; dropping straight into
    a quadrant makes that quadrant the task's new home. The task row's
    ``bucket`` and ``task_type`` are written here along with every
    position, so both buckets are consistent when this returns.
    """
    # Validate the index before any position is rewritten
    clamp_index(target_index, 0)

    task_type = target_bucket.quadrant or task.task_type
    if task.bucket != target_bucket:
        await remove(conn, task_id=task.id, bucket=task.bucket)
    await conn.execute(
        "UPDATE tasks SET bucket = ?, task_type = ? WHERE id = ?",
        (target_bucket.value, task_type.value, task.id),
    )
    position = await insert(conn, task_id=task.id, bucket=target_bucket, index=target_index)

    logger.debug(
        "ordering_move",
        extra={
            "task_id": task.id,
            "from_bucket": task.bucket.value,
            "to_bucket": target_bucket.value,
            "position": position,
        },
    )
    return Placement(bucket=target_bucket, task_type=task_type, position=position)


async def reorder(conn: aiosqlite.Connection, *, bucket: Bucket, ordered_ids: list[int]) -> list[int]:
    """Apply a client-side ordering to the bucket.

    Listed ids come first in the given order; active tasks that were not
    listed keep their relative order after them.

    Raises:
        ValidationError: If an id is repeated or is not an active task of the bucket
    """
    if len(set(ordered_ids)) != len(ordered_ids):
        msg = "Duplicate task ids in ordering"
        raise ValidationError(msg)

    current = await active_ids(conn, bucket)
    unknown = [task_id for task_id in ordered_ids if task_id not in current]
    if unknown:
        msg = f"Tasks {unknown} are not active in bucket {bucket.value}"
        raise ValidationError(msg)

    listed = set(ordered_ids)
    final = [*ordered_ids, *(task_id for task_id in current if task_id not in listed)]
    await _write_positions(conn, final)
    return final
