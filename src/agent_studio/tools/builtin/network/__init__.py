"""Network tools for fetching URLs and reading web pages."""

from typing import List, Optional

import httpx

from ....config.schemas import ToolSettings
from .browser import WebBrowserTool, extract_page_text
from .http_request import HttpRequestTool

__all__ = [
    "HttpRequestTool",
    "WebBrowserTool",
    "extract_page_text",
    "register_network_tools",
]


def register_network_tools(
    settings: Optional[ToolSettings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> List:
    """Return all network tool instances.

    Args:
        settings: Tool settings
        transport: Shared httpx transport

    Returns:
        List of network tool instances
    """
    return [
        HttpRequestTool(settings, transport),
        WebBrowserTool(settings, transport),
    ]
