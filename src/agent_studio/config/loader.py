"""Configuration loader for agent studio.

This module provides functionality for loading YAML and JSON configurations
with environment variable expansion support, plus the studio settings file
and agent/pipeline catalogs.
"""

import json
import os
import re
from pathlib import Path
from typing import Any

import yaml

from ..models import Agent, Pipeline
from ..utils import get_logger
from .paths import get_default_config_dir
from .schemas import StudioConfig, validate_studio_config

logger = get_logger(__name__)

# Pattern for environment variable substitution: ${VAR_NAME} or ${VAR_NAME:-default}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")

DEFAULT_CONFIG_FILE = "config.yaml"


def _expand_env_vars(value: Any) -> Any:
    """Recursively expand environment variables in a value.

    Supports ${VAR} and ${VAR:-default} syntax.

    Args:
        value: The value to expand (can be str, dict, list)

    Returns:
        The value with environment variables expanded
    """
    if isinstance(value, str):
        def replace_env_var(match: re.Match[str]) -> str:
            default = match.group(2) if match.group(2) is not None else ""
            return os.environ.get(match.group(1), default)

        return ENV_VAR_PATTERN.sub(replace_env_var, value)

    elif isinstance(value, dict):
        return {k: _expand_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [_expand_env_vars(item) for item in value]

    return value


def load_yaml_file(file_path: str | Path) -> dict[str, Any]:
    """Load a YAML file and return its contents as a dictionary.

    Args:
        file_path: Path to the YAML file

    Returns:
        Dictionary containing the YAML contents

    Raises:
        FileNotFoundError: If the file doesn't exist
        yaml.YAMLError: If the file is not valid YAML
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {file_path}")

    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_config_file(
    file_path: str | Path,
    config_type: str = "auto",
    expand_env: bool = True,
) -> dict[str, Any]:
    """Load a configuration file (YAML or JSON) with optional environment variable expansion.

    Args:
        file_path: Path to the configuration file
        config_type: Type of config ("yaml", "json", or "auto" to detect from extension)
        expand_env: Whether to expand environment variables

    Returns:
        Dictionary containing the configuration

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file type is unsupported or invalid
    """
    path = Path(file_path)

    if config_type == "auto":
        suffix = path.suffix.lower()
        if suffix in [".yaml", ".yml"]:
            config_type = "yaml"
        elif suffix == ".json":
            config_type = "json"
        else:
            raise ValueError(f"Cannot detect config type from extension: {suffix}")

    if config_type == "yaml":
        config = load_yaml_file(path)
    elif config_type == "json":
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {file_path}")
        with open(path, "r", encoding="utf-8") as f:
            config = json.load(f)
    else:
        raise ValueError(f"Unsupported config type: {config_type}")

    if not isinstance(config, dict):
        raise ValueError(f"Configuration root must be a mapping: {file_path}")

    if expand_env:
        config = _expand_env_vars(config)

    return config


def load_studio_config(file_path: str | Path | None = None) -> StudioConfig:
    """Load the studio settings.

    Args:
        file_path: Settings file (default: ~/.agent-studio/config.yaml)

    Returns:
        Validated StudioConfig. Defaults when the default file does not exist.

    Raises:
        FileNotFoundError: If an explicitly given file doesn't exist
        ValidationError: If the configuration is invalid
    """
    if file_path is None:
        default_path = get_default_config_dir() / DEFAULT_CONFIG_FILE
        if not default_path.exists():
            logger.debug(f"No settings file at {default_path}, using defaults")
            return StudioConfig()
        file_path = default_path

    return validate_studio_config(load_config_file(file_path))


def load_catalog(file_path: str | Path) -> tuple[list[Agent], list[Pipeline]]:
    """Load agents and pipelines from an app config document.

    The document has the shape ``{agents: [...], pipelines: [...]}``. Both
    snake_case and camelCase keys are accepted.

    Args:
        file_path: Path to the catalog file

    Returns:
        Tuple of (agents, pipelines)

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If ``agents`` or ``pipelines`` is not a list
        ValidationError: If an agent or pipeline is invalid
    """
    # Prompts and documents are literal text, so no ${VAR} expansion
    data = load_config_file(file_path, expand_env=False)

    agents_data = data.get("agents")
    pipelines_data = data.get("pipelines")
    if not isinstance(agents_data, list) or not isinstance(pipelines_data, list):
        raise ValueError("Invalid config file format. 'agents' and 'pipelines' must be lists.")

    agents = [Agent.model_validate(item) for item in agents_data]
    pipelines = [Pipeline.model_validate(item) for item in pipelines_data]
    logger.info(f"Loaded {len(agents)} agents and {len(pipelines)} pipelines from {file_path}")
    return agents, pipelines


def dump_catalog(agents: list[Agent], pipelines: list[Pipeline]) -> dict[str, Any]:
    """Export agents and pipelines as an app config document.

    Args:
        agents: Agents to export
        pipelines: Pipelines to export

    Returns:
        Dictionary with camelCase keys, loadable by ``load_catalog``
    """
    return {
        "agents": [agent.model_dump(mode="json", by_alias=True) for agent in agents],
        "pipelines": [pipeline.model_dump(mode="json", by_alias=True) for pipeline in pipelines],
    }
