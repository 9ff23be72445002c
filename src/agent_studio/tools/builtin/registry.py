"""Registry of the builtin tool implementations, keyed by ToolName."""

from typing import Any, Optional

from ...models import ToolName


class BuiltinRegistry:
    """Holds at most one implementation per ToolName.

    Tools are duck-typed: a ``name`` matching a ToolName value, a
    ``description``, a JSON-schema ``parameters`` dict and an async
    ``execute(**kwargs) -> ToolResult``.
    """

    def __init__(self) -> None:
        self._tools: dict[ToolName, Any] = {}

    def register(self, tool: Any) -> None:
        """Register a tool implementation.

        Raises:
            ValueError: If the tool's name is not a ToolName, or that name
                already has an implementation
        """
        name = self._tool_name(getattr(tool, "name", None))
        if name is None:
            raise ValueError(f"Unknown tool name: {getattr(tool, 'name', None)}")
        if name in self._tools:
            raise ValueError(f"Tool '{name.value}' is already registered")
        self._tools[name] = tool

    def get(self, name: str) -> Optional[Any]:
        """Look up the implementation of a tool, None for unknown names."""
        tool_name = self._tool_name(name)
        return self._tools.get(tool_name) if tool_name else None

    def list_all(self) -> list[Any]:
        return list(self._tools.values())

    def names(self) -> list[str]:
        """Registered tool names, in registration order."""
        return [name.value for name in self._tools]

    @staticmethod
    def _tool_name(name: Any) -> Optional[ToolName]:
        try:
            return ToolName(name)
        except ValueError:
            return None
