"""Task service: lifecycle operations over the tasks table.

Each operation runs in a single store transaction; ordering math is
delegated to ordering_service.
"""

import logging

import aiosqlite

from eisenhower.core import db_client
from eisenhower.core.errors import InvalidStateError, NotFoundError, ValidationError
from eisenhower.core.logging import log_with_context, span
from eisenhower.domain.task import BOARD_COLUMNS, Board, Bucket, Task, task_type_for_new_task
from eisenhower.services import ordering_service


logger = logging.getLogger(__name__)


def _clean_title(title: str) -> str:
    """Trim a title, raising ValidationError if nothing is left."""
    cleaned = title.strip()
    if not cleaned:
        msg = "Title must not be empty"
        raise ValidationError(msg)
    return cleaned


async def _get_task(conn: aiosqlite.Connection, task_id: int) -> Task:
    try:
        row = await db_client.fetch_one(conn, "SELECT * FROM tasks WHERE id = ?", (task_id,))
    except OverflowError:
        # Ids outside SQLite's 64-bit INTEGER range cannot name a row
        raise NotFoundError(task_id) from None
    if row is None:
        raise NotFoundError(task_id)
    return Task.from_row(row)


async def get_task(*, task_id: int) -> Task:
    """Fetch a single task.

    Raises:
        NotFoundError: If the task does not exist
    """
    async with db_client.transaction(immediate=False) as conn:
        return await _get_task(conn, task_id)


async def create_task(*, title: str, bucket: str) -> Task:
    """Create a task at the end of ``bucket``.

    Args:
        title: Task title; surrounding whitespace is removed
        bucket: Target column name

    Returns:
        The created task

    Raises:
        ValidationError: If the title is blank or the bucket is unknown
    """
    with span("task_service.create_task"):
        cleaned = _clean_title(title)
        target = Bucket.parse(bucket)
        task_type = task_type_for_new_task(target)

        async with db_client.transaction() as conn:
            position = await ordering_service.next_position(conn, target)
            now = db_client.now_iso()
            cursor = await conn.execute(
                "INSERT INTO tasks (title, task_type, bucket, completed, position, created_at, updated_at) "
                "VALUES (?, ?, ?, 0, ?, ?, ?)",
                (cleaned, task_type.value, target.value, position, now, now),
            )
            task = await _get_task(conn, cursor.lastrowid)

        log_with_context(logger, "info", "task_created", task_id=task.id, bucket=task.bucket.value)
        return task


async def edit_title(*, task_id: int, title: str) -> Task:
    """Replace a task's title.

    Raises:
        NotFoundError: If the task does not exist
        ValidationError: If the new title is blank
    """
    with span("task_service.edit_title"):
        async with db_client.transaction() as conn:
            await _get_task(conn, task_id)
            cleaned = _clean_title(title)
            await conn.execute(
                "UPDATE tasks SET title = ?, updated_at = ? WHERE id = ?",
                (cleaned, db_client.now_iso(), task_id),
            )
            task = await _get_task(conn, task_id)

        log_with_context(logger, "info", "task_title_edited", task_id=task_id)
        return task


async def move_task(*, task_id: int, bucket: str, index: int | None) -> Task:
    """Move a task to ``index`` within ``bucket`` (a drag-and-drop gesture).

    Moving a task onto its own slot is a no-op apart from ``updated_at``.

    Raises:
        NotFoundError: If the task does not exist
        ValidationError: If the bucket is unknown or the index is negative
        InvalidStateError: If the task is completed
    """
    with span("task_service.move_task"):
        target = Bucket.parse(bucket)

        async with db_client.transaction() as conn:
            task = await _get_task(conn, task_id)
            if task.completed:
                msg = f"Task {task_id} is completed; restore it before moving"
                raise InvalidStateError(msg)

            await ordering_service.move(conn, task=task, target_bucket=target, target_index=index)
            await conn.execute(
                "UPDATE tasks SET updated_at = ? WHERE id = ?",
                (db_client.now_iso(), task_id),
            )
            moved = await _get_task(conn, task_id)

        log_with_context(
            logger,
            "info",
            "task_moved",
            task_id=task_id,
            from_bucket=task.bucket.value,
            to_bucket=moved.bucket.value,
            position=moved.position,
        )
        return moved


async def reorder_bucket(*, bucket: str, ordered_ids: list[int]) -> list[int]:
    """Apply a full client-side ordering to one bucket.

    Returns:
        The bucket's resulting active order

    Raises:
        ValidationError: If the bucket is unknown or an id is not active in it
    """
    with span("task_service.reorder_bucket"):
        target = Bucket.parse(bucket)
        async with db_client.transaction() as conn:
            final = await ordering_service.reorder(conn, bucket=target, ordered_ids=ordered_ids)

        log_with_context(logger, "info", "bucket_reordered", bucket=target.value, count=len(final))
        return final


async def complete_task(*, task_id: int) -> Task:
    """Move a task into the completed list.

    Its bucket and position are frozen so it can be restored later.
    Completing an already completed task changes nothing.

    Raises:
        NotFoundError: If the task does not exist
    """
    with span("task_service.complete_task"):
        async with db_client.transaction() as conn:
            task = await _get_task(conn, task_id)
            if task.completed:
                return task

            await conn.execute(
                "UPDATE tasks SET completed = 1, updated_at = ? WHERE id = ?",
                (db_client.now_iso(), task_id),
            )
            # Close the gap left in the active ordering
            await ordering_service.reindex(conn, task.bucket)
            completed = await _get_task(conn, task_id)

        log_with_context(logger, "info", "task_completed", task_id=task_id, bucket=task.bucket.value)
        return completed


async def restore_task(*, task_id: int) -> Task:
    """Bring a completed task back to the end of its home quadrant.

    A task completed while in Today goes back to the quadrant it came from.

    Raises:
        NotFoundError: If the task does not exist
        InvalidStateError: If the task is not completed
    """
    with span("task_service.restore_task"):
        async with db_client.transaction() as conn:
            task = await _get_task(conn, task_id)
            if not task.completed:
                msg = f"Task {task_id} is not completed"
                raise InvalidStateError(msg)

            home = Bucket.home_of(task.task_type)
            position = await ordering_service.next_position(conn, home)
            await conn.execute(
                "UPDATE tasks SET completed = 0, bucket = ?, position = ?, updated_at = ? WHERE id = ?",
                (home.value, position, db_client.now_iso(), task_id),
            )
            restored = await _get_task(conn, task_id)

        log_with_context(logger, "info", "task_restored", task_id=task_id, bucket=home.value, position=position)
        return restored


async def toggle_task(*, task_id: int) -> Task:
    """Complete an active task or restore a completed one.

    Raises:
        NotFoundError: If the task does not exist
    """
    task = await get_task(task_id=task_id)
    if task.completed:
        return await restore_task(task_id=task_id)
    return await complete_task(task_id=task_id)


async def delete_task(*, task_id: int) -> None:
    """Permanently delete a task.

    Raises:
        NotFoundError: If the task does not exist
    """
    with span("task_service.delete_task"):
        async with db_client.transaction() as conn:
            task = await _get_task(conn, task_id)
            await conn.execute("DELETE FROM tasks WHERE id = ?", (task_id,))
            if not task.completed:
                await ordering_service.reindex(conn, task.bucket)

        log_with_context(logger, "info", "task_deleted", task_id=task_id, bucket=task.bucket.value)


async def list_completed(*, limit: int | None = None) -> list[Task]:
    """Completed tasks, most recently completed first."""
    query = "SELECT * FROM tasks WHERE completed = 1 ORDER BY updated_at DESC, id DESC"
    params: tuple[int, ...] = ()
    if limit is not None:
        query += " LIMIT ?"
        params = (limit,)

    async with db_client.transaction(immediate=False) as conn:
        rows = await db_client.fetch_all(conn, query, params)
    return [Task.from_row(row) for row in rows]


async def list_board() -> Board:
    """Every active column in display order plus the completed list."""
    with span("task_service.list_board"):
        async with db_client.transaction(immediate=False) as conn:
            rows = await db_client.fetch_all(
                conn,
                "SELECT * FROM tasks WHERE completed = 0 ORDER BY bucket, position ASC, id ASC",
            )
            completed_rows = await db_client.fetch_all(
                conn,
                "SELECT * FROM tasks WHERE completed = 1 ORDER BY updated_at DESC, id DESC",
            )

        columns: dict[Bucket, list[Task]] = {bucket: [] for bucket in BOARD_COLUMNS}
        for row in rows:
            task = Task.from_row(row)
            columns[task.bucket].append(task)

        return Board(columns=columns, completed=[Task.from_row(row) for row in completed_rows])
