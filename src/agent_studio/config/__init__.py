"""Configuration management for agent studio."""

from .defaults import PREDEFINED_AGENTS, PREDEFINED_PIPELINES, default_tools
from .loader import (
    dump_catalog,
    load_catalog,
    load_config_file,
    load_studio_config,
    load_yaml_file,
)
from .paths import get_default_config_dir, resolve_config_path
from .schemas import (
    LLMConfig,
    LoggingConfig,
    StudioConfig,
    ToolSettings,
    validate_studio_config,
)

__all__ = [
    # Loaders
    "load_config_file",
    "load_yaml_file",
    "load_studio_config",
    "load_catalog",
    "dump_catalog",
    # Paths
    "get_default_config_dir",
    "resolve_config_path",
    # Schemas
    "LLMConfig",
    "ToolSettings",
    "LoggingConfig",
    "StudioConfig",
    "validate_studio_config",
    # Defaults
    "PREDEFINED_AGENTS",
    "PREDEFINED_PIPELINES",
    "default_tools",
]
