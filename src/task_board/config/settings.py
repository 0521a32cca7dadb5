"""Application settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings loaded from environment variables."""

    app_name: str = "task-board"
    tasks_dir: Path = Path("saved-tasks")
    load_workers: int = Field(default=8, ge=1)
    # When true, startup blocks until the tasks directory has been loaded.
    wait_for_load: bool = False
    load_timeout_s: float = Field(default=30.0, gt=0.0)
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="TASK_BOARD_",
        extra="ignore",
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
