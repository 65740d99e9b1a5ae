"""Configuration management using Pydantic Settings."""

from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

# Default data directory (next to the project checkout)
DEFAULT_DATA_DIR = Path(__file__).parent.parent.parent / "data"


class Settings(BaseSettings):
    """Main health-tracker settings.

    Every field can be overridden with an environment variable prefixed
    with ``HEALTH_TRACKER_`` or from a ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_prefix="HEALTH_TRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    data_dir: Path = DEFAULT_DATA_DIR
    db_filename: str = "health_tracker.db"
    settings_filename: str = "settings.json"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Default look-back for trend series, in days
    chart_days: int = 28
    # Number of most recent journals used to compute goal progress
    goal_window: int = 30

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_filename

    @property
    def settings_path(self) -> Path:
        return self.data_dir / self.settings_filename


def get_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings()
