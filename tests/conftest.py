"""Test configuration and fixtures for agent studio tests.

This module provides shared fixtures and configuration for all tests. The
scripted text generator and tool executor stand in for the model and the
tools, so no test needs network access or an API key.
"""

import asyncio
from typing import Callable, Optional, Union

import pytest

from agent_studio.agent import Completion, ReasoningLoop
from agent_studio.models import Agent, Message, ModelParams, Pipeline, PipelineEdge, PipelineNode, ToolName
from agent_studio.config.defaults import default_tools


class ScriptedGenerator:
    """TextGenerator that replies from a script.

    Each reply is a string, a Completion, or an exception to raise. Replies
    can also be a callable receiving the history, for replies that depend on
    the caller (e.g. a sub-agent).
    """

    def __init__(self, replies: list = None, default: Optional[str] = None) -> None:
        self.replies = list(replies or [])
        self.default = default
        self.calls: list[dict] = []
        self.gate: Optional[asyncio.Event] = None
        self.entered = asyncio.Event()

    async def generate(
        self,
        history: list[Message],
        system_instruction: str,
        model_params: Optional[ModelParams] = None,
    ) -> Completion:
        self.calls.append(
            {"history": list(history), "system_instruction": system_instruction, "model_params": model_params}
        )
        self.entered.set()
        if self.gate is not None:
            await self.gate.wait()

        if self.replies:
            reply = self.replies.pop(0)
        elif self.default is not None:
            reply = self.default
        else:
            raise AssertionError("ScriptedGenerator ran out of replies")

        if callable(reply) and not isinstance(reply, type):
            reply = reply(history)
        if isinstance(reply, BaseException):
            raise reply
        if isinstance(reply, Completion):
            return reply
        return Completion(text=reply)


class RecordingToolExecutor:
    """ToolExecutor that records calls and answers from a table."""

    def __init__(self, results: Optional[dict[str, Union[str, Callable[[str], str]]]] = None) -> None:
        self.results = results or {}
        self.calls: list[tuple[str, str]] = []

    async def execute(self, tool_name: str, arg_string: str) -> str:
        self.calls.append((tool_name, arg_string))
        result = self.results.get(tool_name, f"{tool_name} result for {arg_string}")
        if callable(result):
            return result(arg_string)
        return result


class StepRecorder:
    """Collects ``(step, is_final)`` pairs from the reasoning loop."""

    def __init__(self) -> None:
        self.steps: list = []

    def __call__(self, step, is_final: bool = False) -> None:
        self.steps.append((step, is_final))

    @property
    def final(self):
        finals = [step for step, is_final in self.steps if is_final]
        return finals[-1] if finals else None

    @property
    def intermediate(self) -> list:
        return [step for step, is_final in self.steps if not is_final]


def make_agent(
    agent_id: str,
    name: Optional[str] = None,
    tools: tuple = (),
    sub_agent_ids: Optional[list[str]] = None,
    **kwargs,
) -> Agent:
    """Build an agent with the given tools enabled."""
    return Agent(
        id=agent_id,
        name=name or agent_id.replace("-", " ").title(),
        description=kwargs.pop("description", f"Test agent {agent_id}"),
        system_prompt=kwargs.pop("system_prompt", f"You are {agent_id}."),
        tools=default_tools(*tools),
        is_meta=sub_agent_ids is not None,
        sub_agent_ids=sub_agent_ids or [],
        **kwargs,
    )


def make_pipeline(pipeline_id: str, nodes: dict[str, str], edges: list[tuple[str, str]]) -> Pipeline:
    """Build a pipeline from ``{node_id: agent_id}`` and ``(source, target)`` pairs."""
    return Pipeline(
        id=pipeline_id,
        name=pipeline_id,
        nodes=[PipelineNode(id=node_id, agent_id=agent_id) for node_id, agent_id in nodes.items()],
        edges=[
            PipelineEdge(id=f"e{index}", source=source, target=target)
            for index, (source, target) in enumerate(edges, start=1)
        ],
    )


@pytest.fixture
def agent_factory():
    return make_agent


@pytest.fixture
def pipeline_factory():
    return make_pipeline


@pytest.fixture
def generator_factory():
    return ScriptedGenerator


@pytest.fixture
def executor_factory():
    return RecordingToolExecutor


@pytest.fixture
def generator():
    """Scripted text generator with no replies queued."""
    return ScriptedGenerator()


@pytest.fixture
def tool_executor():
    """Tool executor answering every call with a canned result."""
    return RecordingToolExecutor()


@pytest.fixture
def recorder():
    return StepRecorder()


@pytest.fixture
def reasoning_loop(generator, tool_executor):
    """Reasoning loop wired to the scripted fakes."""
    return ReasoningLoop(generator, tool_executor, max_steps=10)


@pytest.fixture
def search_agent():
    """Agent with GoogleSearch and WebBrowser enabled."""
    return make_agent("agent-search", "Searcher", tools=(ToolName.GOOGLE_SEARCH, ToolName.WEB_BROWSER))


@pytest.fixture
def plain_agent():
    """Agent without tools."""
    return make_agent("agent-plain", "Plain Agent")


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests (no external dependencies)")


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on test location."""
    for item in items:
        if "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)

        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
