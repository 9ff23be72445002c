"""Execution engine for agent studio."""

from .orchestrator import AgentNotFoundError, Orchestrator, PipelineNotFoundError
from .pipeline import (
    PipelineScheduler,
    PipelineStructureError,
    build_graph,
    build_node_input,
    topological_order,
)
from .registry import CANCELLED_MESSAGE, ExecutionRegistry, RunHandle

__all__ = [
    # Control surface
    "Orchestrator",
    "AgentNotFoundError",
    "PipelineNotFoundError",
    # Pipelines
    "PipelineScheduler",
    "PipelineStructureError",
    "build_graph",
    "build_node_input",
    "topological_order",
    # Registry
    "ExecutionRegistry",
    "RunHandle",
    "CANCELLED_MESSAGE",
]
