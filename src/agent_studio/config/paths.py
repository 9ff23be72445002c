"""Path utilities for agent studio configuration."""

import os
from pathlib import Path

HOME_ENV_VAR = "AGENT_STUDIO_HOME"


def get_default_config_dir() -> Path:
    """Get the default configuration directory path.

    Returns ``$AGENT_STUDIO_HOME`` if set, otherwise ``~/.agent-studio/``.
    The directory is not created.

    Returns:
        Path to the default configuration directory
    """
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".agent-studio"


def resolve_config_path(config_name: str, config_dir: Path | None = None) -> Path:
    """Resolve a configuration file path.

    An existing path is returned as is. Otherwise the name is looked up in the
    configuration directory with the .yaml, .yml and .json extensions.

    Args:
        config_name: File path, or name with or without extension
        config_dir: Base configuration directory

    Returns:
        Resolved path to the configuration file

    Raises:
        FileNotFoundError: If the configuration file is not found
    """
    direct = Path(config_name).expanduser()
    if direct.exists():
        return direct

    if config_dir is None:
        config_dir = get_default_config_dir()

    for ext in [".yaml", ".yml", ".json"]:
        path = config_dir / f"{config_name}{ext}"
        if path.exists():
            return path

    path = config_dir / config_name
    if path.exists():
        return path

    raise FileNotFoundError(f"Configuration not found: {config_name} in {config_dir}")
