"""SQLite database client: connections, transactions and row helpers."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import aiosqlite

from eisenhower.core.config import constants, settings
from eisenhower.core.errors import StoreError


logger = logging.getLogger(__name__)


def get_db_path(db_path: str | None = None) -> Path:
    """Get the resolved SQLite database file path."""
    path_str = db_path or settings.sqlite_db_path
    return Path(path_str).resolve()


def now_iso() -> str:
    """Current UTC time as an ISO-8601 string with microseconds.

    All timestamps share this format so they sort lexicographically.
    """
    return datetime.now(UTC).isoformat(timespec="microseconds")


async def _connect(path: Path) -> aiosqlite.Connection:
    """Open a connection in autocommit mode with WAL and FK enforcement."""
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = await aiosqlite.connect(str(path), timeout=constants.DB_TIMEOUT_SECONDS, isolation_level=None)
    conn.row_factory = aiosqlite.Row
    await conn.execute("PRAGMA foreign_keys = ON")
    await conn.execute("PRAGMA journal_mode = WAL")
    return conn


@asynccontextmanager
async def transaction(*, db_path: str | None = None, immediate: bool = True) -> AsyncIterator[aiosqlite.Connection]:
    """Run a block as one atomic unit against the store.

    Each call opens its own connection. ``BEGIN IMMEDIATE`` takes the
    database write lock up front, so concurrent writers queue behind each
    other instead of interleaving their position updates.

    Raises:
        StoreError: If the driver fails; domain errors raised inside the
            block roll the transaction back and propagate unchanged.
    """
    path = get_db_path(db_path)
    try:
        conn = await _connect(path)
    except (aiosqlite.Error, OSError) as e:
        logger.error("db_connect_failed", extra={"db_path": str(path), "error": str(e)})
        msg = f"Failed to open database {path}: {e}"
        raise StoreError(msg) from e

    try:
        await conn.execute("BEGIN IMMEDIATE" if immediate else "BEGIN")
        yield conn
        await conn.commit()
    except aiosqlite.Error as e:
        if conn.in_transaction:
            await conn.rollback()
        logger.error("db_transaction_failed", extra={"db_path": str(path), "error": str(e)})
        msg = f"Database operation failed: {e}"
        raise StoreError(msg) from e
    except BaseException:
        if conn.in_transaction:
            await conn.rollback()
        raise
    finally:
        await conn.close()


async def fetch_one(conn: aiosqlite.Connection, query: str, params: tuple[Any, ...] = ()) -> dict[str, Any] | None:
    """Return the first row of a query as a dict, or None."""
    cursor = await conn.execute(query, params)
    row = await cursor.fetchone()
    await cursor.close()
    return dict(row) if row is not None else None


async def fetch_all(conn: aiosqlite.Connection, query: str, params: tuple[Any, ...] = ()) -> list[dict[str, Any]]:
    """Return all rows of a query as dicts."""
    cursor = await conn.execute(query, params)
    rows = await cursor.fetchall()
    await cursor.close()
    return [dict(row) for row in rows]


async def init_db(*, db_path: str | None = None) -> None:
    """Initialize the database schema by delegating to schema.init_db()."""
    from eisenhower.core import schema  # noqa: PLC0415

    await schema.init_db(db_path=db_path)
