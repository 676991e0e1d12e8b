"""Tests for configuration loading."""

import pytest

from eisenhower.core.config import Settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("EISENHOWER_USERNAME", "EISENHOWER_PASSWORD", "PORT", "SQLITE_DB_PATH"):
        monkeypatch.delenv(name, raising=False)


def test_defaults_match_documented_values() -> None:
    """Test settings fall back to the documented defaults."""
    settings = Settings(_env_file=None)

    assert settings.eisenhower_username == "admin"
    assert settings.eisenhower_password == "password"
    assert settings.port == 8080
    assert settings.sqlite_db_path == "tasks.db"


def test_environment_overrides_defaults(monkeypatch) -> None:
    """Test credentials and port are read from the environment."""
    monkeypatch.setenv("EISENHOWER_USERNAME", "alice")
    monkeypatch.setenv("EISENHOWER_PASSWORD", "s3cret-pass")
    monkeypatch.setenv("PORT", "9000")

    settings = Settings(_env_file=None)

    assert settings.eisenhower_username == "alice"
    assert settings.eisenhower_password == "s3cret-pass"
    assert settings.port == 9000


def test_uses_default_credentials_when_untouched() -> None:
    """Test default credentials are detected."""
    assert Settings(_env_file=None).uses_default_credentials() is True


def test_uses_default_credentials_when_only_password_changed() -> None:
    """Test a leftover default username still counts as default credentials."""
    settings = Settings(_env_file=None, eisenhower_password="s3cret-pass")

    assert settings.uses_default_credentials() is True


def test_custom_credentials_are_not_default() -> None:
    """Test fully overridden credentials are accepted."""
    settings = Settings(_env_file=None, eisenhower_username="alice", eisenhower_password="s3cret-pass")

    assert settings.uses_default_credentials() is False
