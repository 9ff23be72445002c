"""Agent entity for agent studio.

An agent is a persona with an instruction prompt, a fixed set of tools that
can be switched on and off, optional knowledge documents, and optionally a
list of other agents it may delegate to.
"""

import re
from enum import Enum
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

SUB_AGENT_PREFIX = "Agent_"


class ToolName(str, Enum):
    """Names of the tools an agent can enable."""

    GOOGLE_SEARCH = "GoogleSearch"
    HTTP_REQUEST = "HttpRequest"
    CODE_INTERPRETER = "CodeInterpreter"
    WEB_BROWSER = "WebBrowser"


class CatalogModel(BaseModel):
    """Base for catalog entities.

    Accepts snake_case field names as well as the camelCase keys used by
    exported app configs.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Tool(CatalogModel):
    """A tool slot on an agent.

    Attributes:
        name: Tool name
        enabled: Whether the agent may invoke the tool
        description: Tool description shown to the model
        warning: Optional safety warning
    """

    name: ToolName
    enabled: bool = False
    description: str = ""
    warning: Optional[str] = None


class KnowledgeDocument(CatalogModel):
    """A document attached to an agent as extra context.

    Attributes:
        name: Display name
        mime_type: MIME type of the content
        content: Document text, or base64 data when ``encoding`` is "base64"
        encoding: How ``content`` is encoded
    """

    name: str
    mime_type: str = "text/plain"
    content: str
    encoding: Literal["text", "base64"] = "text"

    @property
    def is_binary(self) -> bool:
        return self.encoding == "base64"


class ModelParams(BaseModel):
    """Model parameters for one generation request.

    ``None`` values fall back to the LLM configuration defaults.
    """

    model: Optional[str] = None
    temperature: Optional[float] = Field(None, ge=0, le=2)
    max_output_tokens: Optional[int] = Field(None, ge=1)


def sub_agent_tool_name(agent_name: str) -> str:
    """Pseudo-tool name under which a sub-agent is invocable.

    Args:
        agent_name: Display name of the sub-agent

    Returns:
        Name such as ``Agent_Web_Researcher``
    """
    slug = re.sub(r"\W+", "_", agent_name).strip("_")
    return f"{SUB_AGENT_PREFIX}{slug}"


class Agent(CatalogModel):
    """Represents an AI persona the reasoning loop can run.

    Attributes:
        id: Unique agent identifier
        name: Display name
        description: Short description, also used for sub-agent descriptors
        avatar: Emoji or short label shown next to the name
        system_prompt: Instruction text
        tools: Tool slots in display order
        documents: Attached knowledge documents
        is_meta: Whether the agent may call other agents
        sub_agent_ids: Agents a meta-agent may call
        model: Override model identifier
        temperature: Override sampling temperature
        max_output_tokens: Override output token limit
        is_predefined: Whether the agent ships with the studio
        tags: Free-form labels for browsing the catalog
        predefined_questions: Suggested first questions
    """

    id: str = Field(..., min_length=1, description="Unique agent identifier")
    name: str = Field(..., min_length=1, description="Display name")
    description: str = Field(default="", description="Short description")
    avatar: str = Field(default="", description="Avatar emoji or label")
    system_prompt: str = Field(..., description="Instruction text")
    tools: list[Tool] = Field(default_factory=list, description="Tool slots")
    documents: list[KnowledgeDocument] = Field(default_factory=list, alias="files")
    is_meta: bool = Field(default=False, description="Whether the agent may call other agents")
    sub_agent_ids: list[str] = Field(default_factory=list, description="Agents a meta-agent may call")
    model: Optional[str] = Field(None, description="Override model identifier")
    temperature: Optional[float] = Field(None, ge=0, le=2, description="Override temperature")
    max_output_tokens: Optional[int] = Field(None, ge=1, description="Override output token limit")
    is_predefined: bool = False
    tags: list[str] = Field(default_factory=list, description="Catalog labels")
    predefined_questions: list[str] = Field(default_factory=list, description="Suggested questions")

    @model_validator(mode="after")
    def _check_sub_agents(self) -> "Agent":
        if self.id in self.sub_agent_ids:
            raise ValueError(f"Agent '{self.id}' cannot list itself as a sub-agent")
        return self

    @property
    def tool_name(self) -> str:
        """Pseudo-tool name used when this agent is called as a sub-agent."""
        return sub_agent_tool_name(self.name)

    @property
    def model_params(self) -> ModelParams:
        return ModelParams(
            model=self.model,
            temperature=self.temperature,
            max_output_tokens=self.max_output_tokens,
        )

    def enabled_tools(self) -> list[Tool]:
        """Get the enabled tool slots, in display order."""
        return [tool for tool in self.tools if tool.enabled]

    def enabled_tool_names(self) -> set[str]:
        """Get the names of the enabled tools."""
        return {tool.name.value for tool in self.enabled_tools()}

    def has_tool(self, tool_name: str) -> bool:
        """Check if the agent has a specific tool enabled.

        Args:
            tool_name: Name of the tool to check

        Returns:
            True if the tool is enabled on this agent
        """
        return tool_name in self.enabled_tool_names()

    def permits_sub_agent(self, agent_id: str) -> bool:
        """Check whether this agent may delegate to ``agent_id``."""
        return self.is_meta and agent_id in self.sub_agent_ids

    def to_adk_config(self) -> dict[str, Any]:
        """Export the agent as an ADK style config.

        Returns:
            Dictionary with name, description, instructions and enabled tools
        """
        return {
            "name": self.name,
            "description": self.description,
            "instructions": self.system_prompt,
            "tools": [tool.name.value for tool in self.enabled_tools()],
        }

    def apply_adk_config(self, data: dict[str, Any]) -> "Agent":
        """Create an updated copy from an ADK style config.

        Args:
            data: Config with ``name``, ``instructions``, optional
                ``description`` and ``tools``

        Returns:
            Updated agent (immutable pattern)

        Raises:
            ValueError: If ``name`` or ``instructions`` is missing
        """
        if not data.get("name") or not data.get("instructions"):
            raise ValueError("Invalid config: 'name' and 'instructions' are required.")

        listed = data.get("tools")
        listed = set(listed) if isinstance(listed, list) else set()
        tools = [tool.model_copy(update={"enabled": tool.name.value in listed}) for tool in self.tools]

        return self.model_copy(
            update={
                "name": data["name"],
                "description": data.get("description") or self.description,
                "system_prompt": data["instructions"],
                "tools": tools,
            }
        )
