"""Environment configuration using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file early to ensure environment variables are set
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from MEMO_* environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="MEMO_", case_sensitive=False, extra="ignore"
    )

    notes_dir: Path = Path(".memo-notes")
    note_extension: str = ".note"
    page_size: int = Field(default=10, ge=1)
    log_level: str = "WARNING"
    # Accepted for forward compatibility; no command launches an editor yet.
    editor: str | None = None


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
