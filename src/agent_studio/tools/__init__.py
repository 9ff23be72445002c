"""Tool integration for agent studio.

The reasoning loop invokes tools through the ToolExecutor capability. The
builtin tools implement it for the four ToolName values.
"""

from .builtin import (
    BuiltinRegistry,
    CodeInterpreterTool,
    HttpRequestTool,
    ToolResult,
    WebBrowserTool,
    WebSearchTool,
    register_builtin_tools,
)
from .executor import BuiltinToolExecutor, ToolExecutor

__all__ = [
    # Executor
    "ToolExecutor",
    "BuiltinToolExecutor",
    # Builtin
    "BuiltinRegistry",
    "ToolResult",
    "WebSearchTool",
    "HttpRequestTool",
    "WebBrowserTool",
    "CodeInterpreterTool",
    "register_builtin_tools",
]
