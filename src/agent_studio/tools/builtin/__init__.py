"""Builtin tool library for agent studio.

One implementation per ToolName:
- search: GoogleSearch through the text generator
- network: HttpRequest and WebBrowser over httpx
- programming: CodeInterpreter in a restricted namespace

Example:
    >>> from agent_studio.tools.builtin import register_builtin_tools
    >>> registry = register_builtin_tools(llm_client)
    >>> registry.names()
    ['GoogleSearch', 'HttpRequest', 'CodeInterpreter', 'WebBrowser']
"""

from typing import Optional

import httpx

from ...config.schemas import ToolSettings
from .network import HttpRequestTool, WebBrowserTool, register_network_tools
from .programming import CodeInterpreterTool, register_programming_tools
from .registry import BuiltinRegistry
from .result import ToolResult
from .search import WebSearchTool

__all__ = [
    # Core classes
    "ToolResult",
    "BuiltinRegistry",
    # Tools
    "WebSearchTool",
    "HttpRequestTool",
    "WebBrowserTool",
    "CodeInterpreterTool",
    # Registration functions
    "register_builtin_tools",
    "register_network_tools",
    "register_programming_tools",
]


def register_builtin_tools(
    generator,
    settings: Optional[ToolSettings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> BuiltinRegistry:
    """Register all builtin tools and return the registry.

    Args:
        generator: TextGenerator used by GoogleSearch
        settings: Tool settings
        transport: httpx transport for the network tools

    Returns:
        BuiltinRegistry with one tool per ToolName
    """
    settings = settings or ToolSettings()
    registry = BuiltinRegistry()

    registry.register(WebSearchTool(generator, settings))
    network = {tool.name: tool for tool in register_network_tools(settings, transport)}
    registry.register(network["HttpRequest"])
    for tool in register_programming_tools():
        registry.register(tool)
    registry.register(network["WebBrowser"])

    return registry
