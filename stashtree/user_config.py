"""User configuration management for stashtree.

Handles reading and writing the .stashtree/config.yaml file in each repository.
"""

from pathlib import Path

import yaml


# Default configuration values
DEFAULT_CONFIG = {
    "context_lines": 3,
    "max_workers": 1,
    "detached_head_name": "HEAD",
    "color": True,
    "pager": True,
}


def get_config_dir(repo_root: Path) -> Path:
    """Get the repository config directory.

    Args:
        repo_root: The root directory of the git repository.

    Returns:
        Path to .stashtree/
    """
    return repo_root / ".stashtree"


def get_config_file(repo_root: Path) -> Path:
    """Return path to the config.yaml file.

    Args:
        repo_root: The root directory of the git repository.

    Returns:
        Path to .stashtree/config.yaml.
    """
    return get_config_dir(repo_root) / "config.yaml"


def load_config(repo_root: Path) -> dict:
    """Load the stashtree configuration from config.yaml.

    Missing keys are filled from DEFAULT_CONFIG. Nothing is written when
    the file does not exist.

    Args:
        repo_root: The root directory of the git repository.

    Returns:
        Configuration dictionary.
    """
    config_file = get_config_file(repo_root)

    if not config_file.exists():
        return DEFAULT_CONFIG.copy()

    try:
        with open(config_file, "r") as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        # If config is corrupted, return defaults
        return DEFAULT_CONFIG.copy()

    if not isinstance(config, dict):
        return DEFAULT_CONFIG.copy()

    # Merge with defaults for any missing keys
    for key, value in DEFAULT_CONFIG.items():
        if key not in config:
            config[key] = value
    return config


def save_config(repo_root: Path, config: dict) -> None:
    """Save the configuration to config.yaml.

    Args:
        repo_root: The root directory of the git repository.
        config: Configuration dictionary to save.
    """
    config_file = get_config_file(repo_root)

    # Ensure directory exists
    config_file.parent.mkdir(exist_ok=True)

    with open(config_file, "w") as f:
        yaml.dump(
            config,
            f,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )
