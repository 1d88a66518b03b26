"""Configuration storage for todovibe.

Preferences live in ``~/.todovibe/config.json``; the directory can be
moved with the ``TODOVIBE_HOME`` env var. The task store sits next to
it unless a different path is given.
"""

import json
import logging
import os
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

HOME_ENV_VAR = "TODOVIBE_HOME"


class AppConfig(BaseModel):
    """User preferences."""

    store_file: str = Field(
        default="tasks.json",
        description="Task store, relative to the config directory or absolute",
    )
    upcoming_days: int = Field(default=7, ge=1, description="Length of the upcoming window")


def get_config_dir() -> Path:
    """Get the todovibe config directory."""
    env = os.getenv(HOME_ENV_VAR)
    if env:
        return Path(env).expanduser().resolve()
    return (Path.home() / ".todovibe").resolve()


def get_config() -> AppConfig:
    """Load configuration, falling back to defaults."""
    config_file = get_config_dir() / "config.json"
    if config_file.exists():
        try:
            data = json.loads(config_file.read_text(encoding="utf-8"))
            return AppConfig(**data)
        except (json.JSONDecodeError, ValidationError, TypeError, OSError) as e:
            logger.warning(f"Ignoring invalid config {config_file}: {e}")
    return AppConfig()  # defaults


def save_config(config: AppConfig) -> None:
    """Save configuration."""
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)
    (config_dir / "config.json").write_text(
        json.dumps(config.model_dump(), indent=2),
        encoding="utf-8",
    )


def get_store_path(config: AppConfig) -> Path:
    """Resolve the task store location for ``config``."""
    store = Path(config.store_file).expanduser()
    if store.is_absolute():
        return store
    return get_config_dir() / store
