"""SQLite schema management (versioned SQL migrations)."""

import logging
from pathlib import Path

import aiosqlite

from eisenhower.core import db_client
from eisenhower.core.config import constants
from eisenhower.core.errors import StoreError


logger = logging.getLogger(__name__)


def _migration_files(migrations_dir: Path) -> list[tuple[int, Path]]:
    """Return (version, path) pairs for every ``NNN_name.sql`` file, oldest first."""
    files = []
    for path in sorted(migrations_dir.glob("*.sql")):
        version = int(path.stem.split("_", 1)[0])
        files.append((version, path))
    return sorted(files)


async def init_db(*, db_path: str | None = None, migrations_dir: Path | None = None) -> list[int]:
    """Apply pending migrations and return the versions applied by this call.

    Applied versions are recorded in ``schema_migrations`` so running this
    on every startup is safe.
    """
    migrations_dir = migrations_dir or constants.MIGRATIONS_DIR
    path = db_client.get_db_path(db_path)
    applied: list[int] = []

    try:
        conn = await db_client._connect(path)  # noqa: SLF001
    except (aiosqlite.Error, OSError) as e:
        msg = f"Failed to open database {path}: {e}"
        raise StoreError(msg) from e

    try:
        await conn.execute(
            "CREATE TABLE IF NOT EXISTS schema_migrations (version INTEGER PRIMARY KEY, applied_at TEXT NOT NULL)"
        )
        for version, migration in _migration_files(migrations_dir):
            row = await db_client.fetch_one(conn, "SELECT version FROM schema_migrations WHERE version = ?", (version,))
            if row:
                continue

            await conn.executescript(migration.read_text(encoding="utf-8"))
            await conn.execute(
                "INSERT INTO schema_migrations (version, applied_at) VALUES (?, ?)",
                (version, db_client.now_iso()),
            )
            applied.append(version)
            logger.info("migration_applied", extra={"version": version, "file": migration.name})
    except aiosqlite.Error as e:
        logger.error("migration_failed", extra={"db_path": str(path), "error": str(e)})
        msg = f"Failed to apply migrations: {e}"
        raise StoreError(msg) from e
    finally:
        await conn.close()

    logger.info("Database initialized", extra={"db_path": str(path), "applied": applied})
    return applied
