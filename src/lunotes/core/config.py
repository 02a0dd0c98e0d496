"""
Application Configuration

Centralized settings management using Pydantic BaseSettings.
All values are loaded from environment variables or .env file.
"""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with environment variable binding.

    Every value has a default, so a fresh install runs without any
    environment set up.

    Optional env vars:
        DATA_DIR (~/.local/share/lunotes), DATABASE_FILE (lunotes.db),
        NOTES_KEY (lunotes-data), CATEGORIES_KEY (lunotes-categories),
        LOG_LEVEL (INFO)
    """

    PROJECT_NAME: str = "Lunotes"

    # Storage
    DATA_DIR: Path = Path.home() / ".local" / "share" / "lunotes"
    DATABASE_FILE: str = "lunotes.db"

    # Keys of the two persisted records
    NOTES_KEY: str = "lunotes-data"
    CATEGORIES_KEY: str = "lunotes-categories"

    # Logging
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",  # Silently ignore unknown env vars
    )

    @property
    def DATABASE_PATH(self) -> Path:
        """Location of the SQLite file."""
        return self.DATA_DIR / self.DATABASE_FILE

    @property
    def DATABASE_URL(self) -> str:
        """Synchronous SQLite connection string."""
        return f"sqlite:///{self.DATABASE_PATH}"


settings = Settings()
