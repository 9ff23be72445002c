"""ToolResult class for builtin tools.

This module defines the standardized result every builtin tool returns. The
executor turns it into the observation text the model sees.
"""

from typing import Optional


class ToolResult:
    """Result of tool execution.

    Attributes:
        success: Whether the tool execution succeeded
        data: Result data (if successful)
        error: Error message (if failed)
        truncated: Whether output was cut to the tool's character limit
    """

    def __init__(
        self,
        success: bool,
        data: Optional[str] = None,
        error: Optional[str] = None,
        truncated: bool = False,
    ):
        self.success = success
        self.data = data
        self.error = error
        self.truncated = truncated

    def to_content(self) -> str:
        """Format for LLM consumption.

        Returns:
            Result data, or ``Error: ...`` for failures
        """
        if self.success:
            return self.data or ""
        return f"Error: {self.error}"

    @classmethod
    def from_text(cls, content: str, max_chars: int, marker: str = "... (truncated)") -> "ToolResult":
        """Create a successful result, cutting the text to ``max_chars``.

        Args:
            content: Result text
            max_chars: Character limit
            marker: Appended when the text was cut

        Returns:
            ToolResult with ``truncated`` set when the text was cut
        """
        if len(content) > max_chars:
            return cls(success=True, data=content[:max_chars] + marker, truncated=True)
        return cls(success=True, data=content)

    @classmethod
    def failure(cls, error: str) -> "ToolResult":
        return cls(success=False, error=error)

    def __repr__(self) -> str:
        if self.success:
            return f"ToolResult(success={self.success}, truncated={self.truncated}, len={len(self.data) if self.data else 0})"
        return f"ToolResult(success={self.success}, error={self.error})"
