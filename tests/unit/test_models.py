"""Unit tests for data models."""

import pytest
from pydantic import ValidationError

from agent_studio.models import (
    Agent,
    AgentStep,
    ChatMessage,
    ExecutionKind,
    ExecutionState,
    ExecutionStatus,
    KnowledgeDocument,
    Pipeline,
    PipelineStep,
    ReActStep,
    ToolName,
    sub_agent_tool_name,
)
from agent_studio.config.defaults import default_tools


class TestAgent:
    """Tests for Agent model."""

    def test_accepts_camel_case_keys(self):
        agent = Agent.model_validate(
            {
                "id": "a1",
                "name": "Helper",
                "systemPrompt": "Be helpful.",
                "isMeta": True,
                "subAgentIds": ["a2"],
                "maxOutputTokens": 512,
                "files": [{"name": "notes.txt", "mimeType": "text/plain", "content": "hi"}],
            }
        )
        assert agent.system_prompt == "Be helpful."
        assert agent.is_meta
        assert agent.sub_agent_ids == ["a2"]
        assert agent.max_output_tokens == 512
        assert agent.documents[0].mime_type == "text/plain"

    def test_agent_cannot_list_itself(self):
        with pytest.raises(ValidationError, match="itself"):
            Agent(id="a1", name="Loop", system_prompt="x", is_meta=True, sub_agent_ids=["a1"])

    def test_enabled_tools(self):
        agent = Agent(
            id="a1",
            name="Tools",
            system_prompt="x",
            tools=default_tools(ToolName.GOOGLE_SEARCH, ToolName.WEB_BROWSER),
        )
        assert agent.enabled_tool_names() == {"GoogleSearch", "WebBrowser"}
        assert agent.has_tool("GoogleSearch")
        assert not agent.has_tool("CodeInterpreter")
        assert [tool.name for tool in agent.enabled_tools()] == [ToolName.GOOGLE_SEARCH, ToolName.WEB_BROWSER]

    def test_tool_name_slug(self):
        assert sub_agent_tool_name("Web Researcher") == "Agent_Web_Researcher"
        assert sub_agent_tool_name("  Q&A bot! ") == "Agent_Q_A_bot"
        agent = Agent(id="a1", name="Creative Writer", system_prompt="x")
        assert agent.tool_name == "Agent_Creative_Writer"

    def test_permits_sub_agent_requires_meta(self):
        meta = Agent(id="m", name="Meta", system_prompt="x", is_meta=True, sub_agent_ids=["a"])
        plain = Agent(id="p", name="Plain", system_prompt="x", sub_agent_ids=["a"])
        assert meta.permits_sub_agent("a")
        assert not meta.permits_sub_agent("b")
        assert not plain.permits_sub_agent("a")

    def test_model_params(self):
        agent = Agent(id="a1", name="A", system_prompt="x", model="m-1", temperature=0.2)
        params = agent.model_params
        assert params.model == "m-1"
        assert params.temperature == 0.2
        assert params.max_output_tokens is None


class TestAdkConfig:
    """Tests for ADK config export and import."""

    @pytest.fixture
    def agent(self):
        return Agent(
            id="a1",
            name="Researcher",
            description="Finds things",
            system_prompt="Research.",
            tools=default_tools(ToolName.GOOGLE_SEARCH),
        )

    def test_export(self, agent):
        assert agent.to_adk_config() == {
            "name": "Researcher",
            "description": "Finds things",
            "instructions": "Research.",
            "tools": ["GoogleSearch"],
        }

    def test_apply_enables_exactly_listed_tools(self, agent):
        updated = agent.apply_adk_config(
            {"name": "Renamed", "instructions": "New prompt.", "tools": ["WebBrowser", "HttpRequest"]}
        )
        assert updated.name == "Renamed"
        assert updated.system_prompt == "New prompt."
        assert updated.description == "Finds things"
        assert updated.enabled_tool_names() == {"WebBrowser", "HttpRequest"}
        # Original unchanged
        assert agent.name == "Researcher"
        assert agent.enabled_tool_names() == {"GoogleSearch"}

    @pytest.mark.parametrize("data", [{"name": "x"}, {"instructions": "y"}, {}])
    def test_apply_requires_name_and_instructions(self, agent, data):
        with pytest.raises(ValueError, match="'name' and 'instructions' are required"):
            agent.apply_adk_config(data)


class TestKnowledgeDocument:
    def test_binary_flag(self):
        assert KnowledgeDocument(name="a.png", mime_type="image/png", content="AAAA", encoding="base64").is_binary
        assert not KnowledgeDocument(name="a.txt", content="text").is_binary


class TestPipeline:
    """Tests for Pipeline model."""

    @pytest.fixture
    def pipeline(self):
        return Pipeline.model_validate(
            {
                "id": "p1",
                "name": "Diamond",
                "nodes": [
                    {"id": "n1", "agentId": "a", "position": {"x": 0, "y": 0}},
                    {"id": "n2", "agentId": "b"},
                    {"id": "n3", "agentId": "c"},
                    {"id": "n4", "agentId": "b"},
                ],
                "edges": [
                    {"id": "e1", "source": "n1", "target": "n2"},
                    {"id": "e2", "source": "n3", "target": "n4"},
                    {"id": "e3", "source": "n2", "target": "n4"},
                ],
            }
        )

    def test_incoming_edges_in_edge_order(self, pipeline):
        assert [edge.source for edge in pipeline.incoming_edges("n4")] == ["n3", "n2"]
        assert pipeline.incoming_edges("n1") == []

    def test_without_agent_drops_nodes_and_edges(self, pipeline):
        trimmed = pipeline.without_agent("b")
        assert [node.id for node in trimmed.nodes] == ["n1", "n3"]
        assert trimmed.edges == []
        assert pipeline.node_count == 4

    def test_uses_agent(self, pipeline):
        assert pipeline.uses_agent("c")
        assert not pipeline.uses_agent("z")


class TestSteps:
    def test_agent_step_final(self):
        assert AgentStep(thought="t", final_answer="done").is_final
        assert not AgentStep(thought="t", action="X(\"y\")", observation="z").is_final

    def test_steps_are_frozen(self):
        step = ReActStep(thought="t")
        with pytest.raises(ValidationError):
            step.thought = "changed"

    def test_to_react_step(self):
        step = AgentStep(thought="t", action="A(\"b\")", observation="o")
        assert step.to_react_step() == ReActStep(thought="t", action="A(\"b\")", observation="o")


class TestExecutionState:
    def test_defaults(self):
        state = ExecutionState(item_id="a1", kind=ExecutionKind.AGENT)
        assert state.status == ExecutionStatus.RUNNING
        assert state.is_running
        assert state.run_id.startswith("run-")
        assert state.duration_seconds is None

    def test_react_steps_and_pipeline_steps(self):
        steps = [ReActStep(thought="one"), ReActStep(thought="two")]
        agent_state = ExecutionState(
            item_id="a1",
            kind=ExecutionKind.AGENT,
            history=[ChatMessage(role="user", content="hi"), ChatMessage(role="agent", thinking_steps=steps)],
        )
        assert agent_state.react_steps == steps
        assert agent_state.pipeline_steps == []

        record = PipelineStep(node_id="n1", agent_id="a1", input="in", output="out")
        pipeline_state = ExecutionState(item_id="p1", kind=ExecutionKind.PIPELINE, history=[record])
        assert pipeline_state.pipeline_steps == [record]

    def test_terminal_statuses(self):
        assert not ExecutionStatus.RUNNING.is_terminal
        assert all(status.is_terminal for status in ExecutionStatus if status != ExecutionStatus.RUNNING)
