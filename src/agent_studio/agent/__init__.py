"""Agent engine for agent studio."""

from .base import ReasoningLoop, StepCallback, render_action
from .llm import Citation, Completion, ContextLimitError, LLMClient, TextGenerator
from .parser import (
    DEFAULT_THOUGHT,
    FinalAnswer,
    NoAction,
    ParsedCompletion,
    SubAgentCall,
    ToolAction,
    parse_completion,
)
from .prompts import CORRECTIVE_FEEDBACK
from .supervisor import DelegationError, SubAgentDirectory

__all__ = [
    # Loop
    "ReasoningLoop",
    "StepCallback",
    "render_action",
    # Text generation
    "TextGenerator",
    "LLMClient",
    "Completion",
    "Citation",
    "ContextLimitError",
    # Parsing
    "parse_completion",
    "ParsedCompletion",
    "ToolAction",
    "SubAgentCall",
    "FinalAnswer",
    "NoAction",
    "DEFAULT_THOUGHT",
    "CORRECTIVE_FEEDBACK",
    # Delegation
    "SubAgentDirectory",
    "DelegationError",
]
