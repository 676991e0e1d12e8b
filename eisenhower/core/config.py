"""Configuration management for eisenhower."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_USERNAME = "admin"
DEFAULT_PASSWORD = "password"  # noqa: S105


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Basic auth credentials (single user)
    eisenhower_username: str = Field(default=DEFAULT_USERNAME, description="Username required on every request")
    eisenhower_password: str = Field(default=DEFAULT_PASSWORD, description="Password required on every request")

    # Server Configuration
    host: str = Field(default="0.0.0.0", description="Interface the HTTP server binds to")  # noqa: S104
    port: int = Field(default=8080, description="Port the HTTP server listens on")

    # SQLite Configuration
    sqlite_db_path: str = Field(default="tasks.db", description="Path to the SQLite database file")

    # Pydantic Logfire Configuration (optional)
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")
    environment: str = Field(default="development", description="Deployment environment name")

    def uses_default_credentials(self) -> bool:
        """Return True if either credential still has its shipped default value."""
        return self.eisenhower_username == DEFAULT_USERNAME or self.eisenhower_password == DEFAULT_PASSWORD


# Application Constants
class Constants:
    """Application-wide constants."""

    # Basic auth challenge
    AUTH_REALM: str = "Eisenhower Matrix"

    # Completed panel
    COMPLETED_LIST_LIMIT: int = 100

    # SQLite busy timeout for writers waiting on an IMMEDIATE transaction
    DB_TIMEOUT_SECONDS: float = 5.0

    # Paths
    PROJECT_ROOT: Path = Path(__file__).parent.parent.parent
    MIGRATIONS_DIR: Path = PROJECT_ROOT / "migrations"
    TEMPLATES_DIR: Path = PROJECT_ROOT / "templates"


def get_settings() -> Settings:
    """Get application settings (singleton pattern)."""
    return Settings()


# Global settings instance
settings = get_settings()
constants = Constants()
