"""Settings for stashtree.

Settings come from .stashtree/config.yaml in the repository (see
user_config.py), validated by StashtreeConfig. The log level can be set with
the STASHTREE_LOG_LEVEL environment variable or a .env file.
"""

import logging
import os
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError, field_validator

from stashtree.user_config import DEFAULT_CONFIG, load_config, save_config

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV_VAR = "STASHTREE_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"


class ConfigError(Exception):
    """Raised when a configuration value is invalid."""

    pass


class StashtreeConfig(BaseModel):
    """Validated per-repository settings."""

    context_lines: int = DEFAULT_CONFIG["context_lines"]
    max_workers: int = DEFAULT_CONFIG["max_workers"]
    detached_head_name: str = DEFAULT_CONFIG["detached_head_name"]
    color: bool = DEFAULT_CONFIG["color"]
    pager: bool = DEFAULT_CONFIG["pager"]

    @field_validator("context_lines")
    @classmethod
    def context_lines_not_negative(cls, v: int) -> int:
        """git diff -U accepts zero or more lines."""
        if v < 0:
            raise ValueError("context_lines must be >= 0")
        return v

    @field_validator("max_workers")
    @classmethod
    def max_workers_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("max_workers must be >= 1")
        return v

    @field_validator("detached_head_name")
    @classmethod
    def sentinel_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("detached_head_name cannot be empty")
        return v.strip()


def load_settings(repo_root: Optional[Path]) -> StashtreeConfig:
    """Load and validate settings for a repository.

    Invalid files fall back to defaults with a warning.

    Args:
        repo_root: Repository root, or None for defaults only.

    Returns:
        StashtreeConfig instance.
    """
    if repo_root is None:
        return StashtreeConfig()

    raw = load_config(repo_root)
    known = {key: value for key, value in raw.items() if key in StashtreeConfig.model_fields}
    try:
        return StashtreeConfig(**known)
    except ValidationError as e:
        logger.warning("Ignoring invalid .stashtree/config.yaml: %s", e)
        return StashtreeConfig()


def set_setting(repo_root: Path, key: str, value: Any) -> StashtreeConfig:
    """Validate and persist a single setting.

    Args:
        repo_root: Repository root.
        key: Setting name.
        value: New value (strings are coerced by pydantic).

    Returns:
        The updated settings.

    Raises:
        ConfigError: If the key is unknown or the value invalid.
    """
    if key not in StashtreeConfig.model_fields:
        raise ConfigError(f"Unknown setting: {key}")

    raw = load_config(repo_root)
    raw[key] = value
    known = {k: v for k, v in raw.items() if k in StashtreeConfig.model_fields}
    try:
        settings = StashtreeConfig(**known)
    except ValidationError as e:
        raise ConfigError(f"Invalid value for {key}: {value!r}\n{e}")

    raw[key] = getattr(settings, key)
    save_config(repo_root, raw)
    return settings


def get_log_level() -> str:
    """Get the log level from the environment (.env is loaded first).

    Returns:
        A logging level name, WARNING if unset or unknown.
    """
    load_dotenv()
    level = os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).upper()
    if not isinstance(logging.getLevelName(level), int):
        return DEFAULT_LOG_LEVEL
    return level
