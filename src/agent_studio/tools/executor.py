"""Tool execution for the reasoning loop.

The loop only knows the ToolExecutor capability: run a named tool with one
string argument and get text back.
"""

from typing import Optional, Protocol

from ..config.schemas import ToolSettings
from ..utils import get_logger
from ..utils.timeout import TimeoutError, wait_with_timeout
from .builtin.registry import BuiltinRegistry
from .builtin.result import ToolResult

logger = get_logger(__name__)


class ToolExecutor(Protocol):
    """Executes a named tool. Never raises: failures become the returned text."""

    async def execute(self, tool_name: str, arg_string: str) -> str:
        ...


class BuiltinToolExecutor:
    """ToolExecutor backed by the builtin tool registry."""

    def __init__(self, registry: BuiltinRegistry, settings: Optional[ToolSettings] = None) -> None:
        """Initialize the executor.

        Args:
            registry: Registered builtin tools
            settings: Tool settings, for the per-call timeout
        """
        self.registry = registry
        self.settings = settings or ToolSettings()

    async def execute(self, tool_name: str, arg_string: str) -> str:
        """Execute a tool.

        The argument string is passed as the tool's first required parameter.

        Args:
            tool_name: ToolName value
            arg_string: Argument parsed from the action

        Returns:
            Observation text, ``Error: ...`` on failure
        """
        tool = self.registry.get(tool_name)
        if tool is None:
            return ToolResult.failure(f"Unknown tool '{tool_name}'.").to_content()

        required = tool.parameters.get("required") or list(tool.parameters.get("properties", {}))
        kwargs = {required[0]: arg_string} if required else {}

        try:
            result = await wait_with_timeout(
                tool.execute(**kwargs), self.settings.timeout_seconds, what=f"Tool '{tool_name}'"
            )
        except TimeoutError as e:
            logger.warning(str(e))
            return ToolResult.failure(str(e)).to_content()
        except Exception as e:
            logger.warning(f"Tool {tool_name} failed: {e}")
            return ToolResult.failure(f"Tool '{tool_name}' failed: {e}").to_content()

        if not result.success:
            logger.warning(f"Tool {tool_name} returned error: {result.error}")
        return result.to_content()
