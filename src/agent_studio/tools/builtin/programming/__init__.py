"""Programming tools for code execution."""

from typing import List

from .interpreter import CodeInterpreterTool, run_restricted

__all__ = [
    "CodeInterpreterTool",
    "run_restricted",
    "register_programming_tools",
]


def register_programming_tools() -> List:
    """Return all programming tool instances.

    Returns:
        List of programming tool instances
    """
    return [CodeInterpreterTool()]
