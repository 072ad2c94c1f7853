"""Configuration management with YAML support and Pydantic validation."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from allyhub.models.task import DEFAULT_SEED_TITLES
from allyhub.models.timer import DEFAULT_TICK_INTERVAL, DEFAULT_TOTAL_DURATION


class TimerConfig(BaseModel):
    """Countdown timer configuration."""

    total_duration_seconds: int = Field(
        default=DEFAULT_TOTAL_DURATION, gt=0, description="Duration the timer resets to"
    )
    tick_interval_seconds: float = Field(
        default=DEFAULT_TICK_INTERVAL, gt=0, description="Wall-clock seconds between ticks"
    )


class TasksConfig(BaseModel):
    """Task list configuration."""

    seed_titles: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SEED_TITLES),
        description="Tasks the list starts with and resets to",
    )

    @field_validator("seed_titles")
    @classmethod
    def validate_seed_titles(cls, v: list[str]) -> list[str]:
        """Reject blank titles and strip surrounding whitespace."""
        titles = [title.strip() for title in v]
        if any(not title for title in titles):
            raise ValueError("seed task titles must not be blank")
        return titles


class NotificationConfig(BaseModel):
    """Notification configuration."""

    enabled: bool = Field(default=True, description="Enable notifications")
    sound: bool = Field(default=True, description="Play sound with notifications")
    on_timer_completed: bool = Field(default=True, description="Notify when the countdown completes")


class Config(BaseSettings):
    """Main application configuration."""

    model_config = SettingsConfigDict(
        env_prefix="ALLYHUB_",
        env_nested_delimiter="__",
    )

    timer: TimerConfig = Field(default_factory=TimerConfig)
    tasks: TasksConfig = Field(default_factory=TasksConfig)
    notifications: NotificationConfig = Field(default_factory=NotificationConfig)


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from YAML file.

    Args:
        config_path: Path to the YAML configuration file. Defaults to config.yaml in CWD.

    Returns:
        Validated Config object.
    """
    if config_path is None:
        config_path = Path("config.yaml")
    else:
        config_path = Path(config_path)

    config_data: dict[str, Any] = {}

    if config_path.exists():
        with open(config_path) as f:
            loaded = yaml.safe_load(f)
            if loaded:
                config_data = loaded

    return Config(**config_data)


# Global config instance - initialized lazily
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def set_config(config: Config) -> None:
    """Replace the global configuration (used by the CLI after --config)."""
    global _config
    _config = config


def reset_config() -> None:
    """Reset the global configuration (useful for testing)."""
    global _config
    _config = None
