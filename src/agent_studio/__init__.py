"""Agent Studio.

A Python framework for defining agents (persona, instructions, tools and
optional sub-agents) and pipelines of agents, and running them as
cancellable, observable background runs against an OpenAI-compatible model.
"""

from .agent import LLMClient, ReasoningLoop, TextGenerator, parse_completion
from .config import (
    LLMConfig,
    StudioConfig,
    ToolSettings,
    load_catalog,
    load_studio_config,
)
from .execution import (
    AgentNotFoundError,
    ExecutionRegistry,
    Orchestrator,
    PipelineNotFoundError,
    PipelineScheduler,
    PipelineStructureError,
)
from .models import (
    Agent,
    AgentStep,
    ExecutionState,
    ExecutionStatus,
    Message,
    Pipeline,
    PipelineStep,
    ReActStep,
    Tool,
    ToolName,
)
from .tools import BuiltinToolExecutor, ToolExecutor, register_builtin_tools
from .utils import CancellationToken, RunCancelledError

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Core entities
    "Agent",
    "Tool",
    "ToolName",
    "Pipeline",
    "Message",
    "ReActStep",
    "AgentStep",
    "PipelineStep",
    "ExecutionState",
    "ExecutionStatus",
    # Configuration
    "LLMConfig",
    "ToolSettings",
    "StudioConfig",
    "load_studio_config",
    "load_catalog",
    # Agent
    "ReasoningLoop",
    "TextGenerator",
    "LLMClient",
    "parse_completion",
    # Execution
    "Orchestrator",
    "PipelineScheduler",
    "ExecutionRegistry",
    "PipelineStructureError",
    "AgentNotFoundError",
    "PipelineNotFoundError",
    # Tools
    "ToolExecutor",
    "BuiltinToolExecutor",
    "register_builtin_tools",
    # Cancellation
    "CancellationToken",
    "RunCancelledError",
]
