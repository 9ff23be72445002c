"""Tests for the CodeInterpreter tool."""

import asyncio

import pytest

from agent_studio.config.schemas import ToolSettings
from agent_studio.tools import BuiltinRegistry, BuiltinToolExecutor
from agent_studio.tools.builtin.programming import CodeInterpreterTool
from agent_studio.tools.builtin.programming import interpreter


@pytest.fixture
def tool():
    return CodeInterpreterTool()


@pytest.mark.asyncio
class TestCodeInterpreterTool:
    async def test_print_output(self, tool):
        result = await tool.execute(code="print(1024 * 768)")
        assert result.success
        assert result.to_content() == "786432"

    async def test_result_variable(self, tool):
        result = await tool.execute(code="result = math.sqrt(16)")
        assert result.to_content() == "4.0"

    async def test_no_output(self, tool):
        result = await tool.execute(code="x = 1")
        assert result.to_content() == "Code executed successfully (no output)"

    async def test_imports_are_blocked(self, tool):
        result = await tool.execute(code="import os")
        assert not result.success
        assert result.to_content().startswith("Error: ")

    async def test_open_is_unavailable(self, tool):
        result = await tool.execute(code="open('/etc/passwd')")
        assert "Name error" in result.error

    async def test_syntax_error(self, tool):
        result = await tool.execute(code="def (")
        assert "Syntax error" in result.error

    async def test_runtime_error(self, tool):
        result = await tool.execute(code="1 / 0")
        assert "ZeroDivisionError" in result.error

    async def test_empty_code(self, tool):
        result = await tool.execute(code="   ")
        assert result.error == "Code parameter is required"


@pytest.fixture
def spawned(monkeypatch):
    """Child processes started by the interpreter."""
    processes = []
    spawn = asyncio.create_subprocess_exec

    async def tracking_spawn(*args, **kwargs):
        process = await spawn(*args, **kwargs)
        processes.append(process)
        return process

    monkeypatch.setattr(interpreter.asyncio, "create_subprocess_exec", tracking_spawn)
    return processes


@pytest.mark.asyncio
class TestRunawaySnippets:
    async def test_killed_when_executor_times_out(self, spawned):
        registry = BuiltinRegistry()
        registry.register(CodeInterpreterTool())
        executor = BuiltinToolExecutor(registry, ToolSettings(timeout_seconds=2))

        observation = await executor.execute("CodeInterpreter", "while True: pass")

        assert observation == "Error: Tool 'CodeInterpreter' timed out after 2 seconds"
        assert len(spawned) == 1
        assert spawned[0].returncode is not None

    async def test_killed_when_cancelled(self, tool, spawned):
        task = asyncio.create_task(tool.execute(code="while True: pass"))
        while not spawned:
            await asyncio.sleep(0.01)

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert spawned[0].returncode is not None

    async def test_comprehensions_run(self, tool):
        result = await tool.execute(code="print(len([x for x in range(10)]))")
        assert result.to_content() == "10"
