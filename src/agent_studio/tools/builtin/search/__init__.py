"""Search tools."""

from .web_search import WebSearchTool

__all__ = ["WebSearchTool"]
