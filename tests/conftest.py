"""Pytest configuration and shared fixtures."""

import itertools
from collections.abc import Callable

import logfire
import pytest

from eisenhower.core import db_client
from eisenhower.core.config import settings


# Keep spans local during tests
logfire.configure(send_to_logfire=False, console=False)


@pytest.fixture
def db_path(tmp_path, monkeypatch) -> str:
    """Point the store at a fresh SQLite file for each test."""
    path = str(tmp_path / "tasks.db")
    monkeypatch.setattr(settings, "sqlite_db_path", path)
    return path


@pytest.fixture
async def initialized_db(db_path: str) -> str:
    """Fresh database with migrations applied."""
    await db_client.init_db(db_path=db_path)
    return db_path


@pytest.fixture
def fake_clock(monkeypatch) -> Callable[[], str]:
    """Deterministic, strictly increasing timestamps."""
    ticks = itertools.count(1)

    def _now() -> str:
        tick = next(ticks)
        return f"2026-01-01T00:{tick // 60:02d}:{tick % 60:02d}.000000+00:00"

    monkeypatch.setattr(db_client, "now_iso", _now)
    return _now
