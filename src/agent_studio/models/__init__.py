"""Data models for agent studio."""

from .agent import (
    SUB_AGENT_PREFIX,
    Agent,
    KnowledgeDocument,
    ModelParams,
    Tool,
    ToolName,
    sub_agent_tool_name,
)
from .execution import ChatMessage, ExecutionKind, ExecutionState, ExecutionStatus
from .pipeline import Pipeline, PipelineEdge, PipelineNode, Position
from .state import Message
from .steps import AgentStep, PipelineStep, ReActStep

__all__ = [
    # Catalog entities
    "Agent",
    "Tool",
    "ToolName",
    "KnowledgeDocument",
    "ModelParams",
    "SUB_AGENT_PREFIX",
    "sub_agent_tool_name",
    "Pipeline",
    "PipelineNode",
    "PipelineEdge",
    "Position",
    # Conversation
    "Message",
    # Steps
    "ReActStep",
    "AgentStep",
    "PipelineStep",
    # Execution state
    "ExecutionState",
    "ExecutionStatus",
    "ExecutionKind",
    "ChatMessage",
]
