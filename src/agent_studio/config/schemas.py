"""Configuration schemas for agent studio.

This module defines Pydantic models for validating configuration data.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field


class LLMConfig(BaseModel):
    """Configuration for the LLM endpoint."""

    endpoint: str = Field(default="https://api.openai.com/v1", description="API base URL")
    model: str = Field(default="gpt-4o-mini", description="Default model identifier")
    api_key_env: str = Field(default="OPENAI_API_KEY", description="Environment variable name containing API key")
    api_type: Literal["openai", "deepseek", "glm", "ollama", "custom"] = Field(
        default="openai", description="API type"
    )
    temperature: float = Field(default=0.7, ge=0, le=2, description="Sampling temperature")
    max_tokens: int | None = Field(default=None, ge=1, description="Maximum tokens to generate")


class ToolSettings(BaseModel):
    """Settings shared by the builtin tools."""

    timeout_seconds: float = Field(default=30, gt=0, description="Per-call tool timeout")
    http_max_chars: int = Field(default=3000, ge=1, description="HttpRequest response limit")
    browser_max_chars: int = Field(default=4000, ge=1, description="WebBrowser page text limit")
    search_model: str | None = Field(default=None, description="Search-capable model for GoogleSearch")
    search_max_results: int = Field(default=5, ge=1, description="Maximum sources listed by GoogleSearch")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: Literal["text", "json"] = "text"
    use_colors: bool = True
    log_file: str | None = None


class StudioConfig(BaseModel):
    """Top-level configuration for agent studio."""

    llm: LLMConfig = Field(default_factory=LLMConfig, description="LLM endpoint configuration")
    max_steps: int = Field(default=10, ge=1, le=100, description="Reasoning cycles per agent run")
    max_delegation_depth: int = Field(default=3, ge=0, description="Nested sub-agent call limit")
    tools: ToolSettings = Field(default_factory=ToolSettings)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    catalog_path: str | None = Field(default=None, description="Agents and pipelines file")


def validate_studio_config(data: dict[str, Any]) -> StudioConfig:
    """Validate studio configuration data.

    Args:
        data: Raw configuration dictionary

    Returns:
        Validated StudioConfig object

    Raises:
        ValidationError: If the configuration is invalid
    """
    return StudioConfig(**data)
