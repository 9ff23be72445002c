"""Tests for BuiltinRegistry and the builtin tool set."""

import pytest

from agent_studio.models import ToolName
from agent_studio.tools.builtin import (
    BuiltinRegistry,
    CodeInterpreterTool,
    register_builtin_tools,
)
from agent_studio.tools.builtin.result import ToolResult


class TestBuiltinRegistry:
    """Test suite for BuiltinRegistry."""

    def test_registry_initialization(self):
        """Test registry starts empty."""
        registry = BuiltinRegistry()
        assert len(registry.list_all()) == 0

    def test_register_single_tool(self):
        registry = BuiltinRegistry()
        tool = CodeInterpreterTool()
        registry.register(tool)
        assert registry.get("CodeInterpreter") is tool
        assert registry.names() == ["CodeInterpreter"]

    def test_register_duplicate_tool_raises_error(self):
        registry = BuiltinRegistry()
        registry.register(CodeInterpreterTool())
        with pytest.raises(ValueError, match="already registered"):
            registry.register(CodeInterpreterTool())

    def test_register_unknown_name_raises_error(self):
        class Teleport:
            name = "Teleport"

        with pytest.raises(ValueError, match="Unknown tool name"):
            BuiltinRegistry().register(Teleport())

    def test_get_missing_tool(self):
        assert BuiltinRegistry().get("GoogleSearch") is None


def test_register_builtin_tools_covers_every_tool_name(generator):
    registry = register_builtin_tools(generator)
    assert registry.names() == [name.value for name in ToolName]
    for tool in registry.list_all():
        assert tool.description
        assert tool.parameters["required"]


class TestToolResult:
    def test_success_content(self):
        assert ToolResult(success=True, data="ok").to_content() == "ok"

    def test_error_content(self):
        assert ToolResult.failure("boom").to_content() == "Error: boom"

    def test_from_text_truncates(self):
        result = ToolResult.from_text("abcdef", 3)
        assert result.truncated
        assert result.to_content() == "abc... (truncated)"

    def test_from_text_within_limit(self):
        result = ToolResult.from_text("abc", 3)
        assert not result.truncated
        assert result.to_content() == "abc"
