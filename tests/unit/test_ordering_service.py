"""Unit tests for ordering_service module."""

import pytest

from eisenhower.core import db_client
from eisenhower.core.errors import ValidationError
from eisenhower.domain.task import Bucket, Quadrant
from eisenhower.services import ordering_service, task_service


async def _create(bucket: Bucket, *titles: str) -> list[int]:
    return [(await task_service.create_task(title=title, bucket=bucket.value)).id for title in titles]


async def _positions(bucket: Bucket) -> list[tuple[int, int]]:
    async with db_client.transaction(immediate=False) as conn:
        rows = await db_client.fetch_all(
            conn,
            "SELECT id, position FROM tasks WHERE bucket = ? AND completed = 0 ORDER BY position",
            (bucket.value,),
        )
    return [(row["id"], row["position"]) for row in rows]


@pytest.mark.unit
class TestClampIndex:
    """Tests for clamp_index function."""

    def test_none_appends(self):
        assert ordering_service.clamp_index(None, 3) == 3

    def test_index_past_the_end_appends(self):
        assert ordering_service.clamp_index(10, 3) == 3

    def test_index_within_range_is_kept(self):
        assert ordering_service.clamp_index(1, 3) == 1

    def test_negative_index_is_rejected(self):
        with pytest.raises(ValidationError, match="negative"):
            ordering_service.clamp_index(-1, 3)


@pytest.mark.unit
class TestInsert:
    """Tests for insert and next_position functions."""

    async def test_next_position_of_empty_bucket_is_one(self, initialized_db):
        async with db_client.transaction() as conn:
            assert await ordering_service.next_position(conn, Bucket.TODAY) == 1

    async def test_insert_shifts_later_tasks(self, initialized_db):
        a, b, c = await _create(Bucket.URGENT_IMPORTANT, "a", "b", "c")

        async with db_client.transaction() as conn:
            position = await ordering_service.insert(conn, task_id=c, bucket=Bucket.URGENT_IMPORTANT, index=0)

        assert position == 1
        assert await _positions(Bucket.URGENT_IMPORTANT) == [(c, 1), (a, 2), (b, 3)]

    async def test_insert_beyond_length_appends(self, initialized_db):
        a, b, c = await _create(Bucket.URGENT_IMPORTANT, "a", "b", "c")

        async with db_client.transaction() as conn:
            position = await ordering_service.insert(conn, task_id=a, bucket=Bucket.URGENT_IMPORTANT, index=99)

        assert position == 3
        assert await _positions(Bucket.URGENT_IMPORTANT) == [(b, 1), (c, 2), (a, 3)]


@pytest.mark.unit
class TestMove:
    """Tests for move function."""

    async def test_move_to_today_keeps_origin_quadrant(self, initialized_db):
        a, b = await _create(Bucket.NOT_URGENT_IMPORTANT, "a", "b")
        task = await task_service.get_task(task_id=a)

        async with db_client.transaction() as conn:
            placement = await ordering_service.move(conn, task=task, target_bucket=Bucket.TODAY, target_index=0)

        assert placement == ordering_service.Placement(Bucket.TODAY, Quadrant.NOT_URGENT_IMPORTANT, 1)
        # Source bucket gap is closed
        assert await _positions(Bucket.NOT_URGENT_IMPORTANT) == [(b, 1)]
        assert await _positions(Bucket.TODAY) == [(a, 1)]

    async def test_move_writes_the_task_row(self, initialized_db):
        a, b = await _create(Bucket.URGENT_IMPORTANT, "a", "b")
        (c,) = await _create(Bucket.NOT_URGENT_NOT_IMPORTANT, "c")
        task = await task_service.get_task(task_id=a)

        async with db_client.transaction() as conn:
            await ordering_service.move(conn, task=task, target_bucket=Bucket.NOT_URGENT_NOT_IMPORTANT, target_index=1)

        moved = await task_service.get_task(task_id=a)
        assert moved.bucket is Bucket.NOT_URGENT_NOT_IMPORTANT
        assert moved.task_type is Quadrant.NOT_URGENT_NOT_IMPORTANT
        assert await _positions(Bucket.URGENT_IMPORTANT) == [(b, 1)]
        assert await _positions(Bucket.NOT_URGENT_NOT_IMPORTANT) == [(c, 1), (a, 2)]

    async def test_move_to_quadrant_adopts_that_quadrant(self, initialized_db):
        (a,) = await _create(Bucket.TODAY, "a")
        task = await task_service.get_task(task_id=a)

        async with db_client.transaction() as conn:
            placement = await ordering_service.move(
                conn, task=task, target_bucket=Bucket.URGENT_NOT_IMPORTANT, target_index=None
            )

        assert placement.task_type is Quadrant.URGENT_NOT_IMPORTANT

    async def test_negative_index_writes_nothing(self, initialized_db):
        a, b = await _create(Bucket.URGENT_IMPORTANT, "a", "b")
        task = await task_service.get_task(task_id=b)

        with pytest.raises(ValidationError):
            async with db_client.transaction() as conn:
                await ordering_service.move(conn, task=task, target_bucket=Bucket.TODAY, target_index=-2)

        assert await _positions(Bucket.URGENT_IMPORTANT) == [(a, 1), (b, 2)]


@pytest.mark.unit
class TestReindexAndReorder:
    """Tests for reindex and reorder functions."""

    async def test_reindex_makes_positions_dense(self, initialized_db):
        a, b, c = await _create(Bucket.TODAY, "a", "b", "c")
        async with db_client.transaction() as conn:
            await conn.execute("UPDATE tasks SET position = position * 10")

        async with db_client.transaction() as conn:
            ordered = await ordering_service.reindex(conn, Bucket.TODAY)

        assert ordered == [a, b, c]
        assert await _positions(Bucket.TODAY) == [(a, 1), (b, 2), (c, 3)]

    async def test_reorder_applies_full_ordering(self, initialized_db):
        a, b, c = await _create(Bucket.TODAY, "a", "b", "c")

        async with db_client.transaction() as conn:
            final = await ordering_service.reorder(conn, bucket=Bucket.TODAY, ordered_ids=[c, a, b])

        assert final == [c, a, b]
        assert await _positions(Bucket.TODAY) == [(c, 1), (a, 2), (b, 3)]

    async def test_reorder_keeps_unlisted_tasks_after_listed_ones(self, initialized_db):
        a, b, c = await _create(Bucket.TODAY, "a", "b", "c")

        async with db_client.transaction() as conn:
            final = await ordering_service.reorder(conn, bucket=Bucket.TODAY, ordered_ids=[c])

        assert final == [c, a, b]

    async def test_reorder_rejects_tasks_from_other_buckets(self, initialized_db):
        (a,) = await _create(Bucket.TODAY, "a")
        (other,) = await _create(Bucket.URGENT_IMPORTANT, "other")

        with pytest.raises(ValidationError, match="not active"):
            async with db_client.transaction() as conn:
                await ordering_service.reorder(conn, bucket=Bucket.TODAY, ordered_ids=[other, a])

    async def test_reorder_rejects_duplicates(self, initialized_db):
        (a,) = await _create(Bucket.TODAY, "a")

        with pytest.raises(ValidationError, match="Duplicate"):
            async with db_client.transaction() as conn:
                await ordering_service.reorder(conn, bucket=Bucket.TODAY, ordered_ids=[a, a])
