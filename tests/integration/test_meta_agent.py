"""Integration tests for meta-agents delegating to sub-agents.

These tests verify:
- A meta-agent can delegate to its listed sub-agents
- The sub-agent's final answer becomes the caller's observation
- Sub-agent steps never reach the caller's step callback
- Unknown, unlisted, recursive and too-deep calls are refused with a message
"""

import pytest

from agent_studio.agent import ReasoningLoop


def route(scripts):
    """Reply per agent, based on the agent's system prompt in turn 0.

    Args:
        scripts: Replies by agent id, consumed in order
    """

    def reply(history):
        opening = history[0].content
        for agent_id, replies in scripts.items():
            if f"You are {agent_id}." in opening:
                return replies.pop(0)
        raise AssertionError("No script for this agent")

    return reply


@pytest.fixture
def team(agent_factory):
    worker = agent_factory("agent-worker", "Worker", tools=("GoogleSearch",))
    boss = agent_factory("agent-boss", "Boss", sub_agent_ids=["agent-worker"])
    return boss, worker


@pytest.mark.asyncio
async def test_delegation_hides_sub_agent_steps(team, generator_factory, executor_factory, recorder):
    boss, worker = team
    generator = generator_factory(
        default=route(
            {
                "agent-boss": [
                    'Thought: The worker can research this.\nAction: Agent_Worker("find the release date")',
                    "Thought: The worker answered.\nFinal Answer: It was released in October.",
                ],
                "agent-worker": [
                    'Action: GoogleSearch("release date")',
                    "Final Answer: October",
                ],
            }
        )
    )
    executor = executor_factory({"GoogleSearch": "Released in October"})
    loop = ReasoningLoop(generator, executor)

    answer = await loop.run(boss, "When was it released?", [boss, worker], recorder)

    assert answer == "It was released in October."
    assert executor.calls == [("GoogleSearch", "release date")]
    [step] = recorder.intermediate
    assert step.action == 'Agent_Worker("find the release date")'
    assert step.observation == "October"
    assert len(recorder.steps) == 2


@pytest.mark.asyncio
async def test_sub_agent_receives_call_arguments(team, generator_factory, tool_executor):
    boss, worker = team
    generator = generator_factory(
        default=route(
            {
                "agent-boss": ['Action: Agent_Worker("summarize chapter 3")', "Final Answer: done"],
                "agent-worker": ["Final Answer: summary"],
            }
        )
    )

    await ReasoningLoop(generator, tool_executor).run(boss, "go", [boss, worker])

    worker_call = generator.calls[1]
    assert worker_call["history"][0].content.endswith("Here is the user's request:\nsummarize chapter 3")
    assert "GoogleSearch" in worker_call["system_instruction"]


@pytest.mark.asyncio
async def test_meta_agent_prompt_lists_sub_agents(team, generator_factory, tool_executor):
    boss, worker = team
    generator = generator_factory(["Final Answer: ok"])

    await ReasoningLoop(generator, tool_executor).run(boss, "go", [boss, worker])

    call = generator.calls[0]
    assert "- Agent_Worker: Test agent agent-worker" in call["system_instruction"]
    assert "Agent_Worker" in call["history"][0].content


@pytest.mark.asyncio
async def test_unknown_sub_agent(team, generator_factory, tool_executor, recorder):
    boss, worker = team
    generator = generator_factory(['Action: Agent_Ghost("boo")', "Final Answer: alone"])

    await ReasoningLoop(generator, tool_executor).run(boss, "go", [boss, worker], recorder)

    assert recorder.intermediate[0].observation == "Error: Sub-agent 'Ghost' was not found."
    assert len(generator.calls) == 2


@pytest.mark.asyncio
async def test_unlisted_sub_agent(team, agent_factory, generator_factory, tool_executor, recorder):
    boss, worker = team
    outsider = agent_factory("agent-outsider", "Outsider")
    generator = generator_factory(['Action: Agent_Outsider("help")', "Final Answer: alone"])

    await ReasoningLoop(generator, tool_executor).run(boss, "go", [boss, worker, outsider], recorder)

    assert recorder.intermediate[0].observation == "Error: Agent 'Outsider' is not one of your permitted sub-agents."
    assert len(generator.calls) == 2


@pytest.mark.asyncio
async def test_recursive_delegation_is_refused(agent_factory, generator_factory, tool_executor):
    alpha = agent_factory("agent-alpha", "Alpha", sub_agent_ids=["agent-beta"])
    beta = agent_factory("agent-beta", "Beta", sub_agent_ids=["agent-alpha"])
    generator = generator_factory(
        default=route(
            {
                "agent-alpha": ['Action: Agent_Beta("help me")', "Final Answer: alpha done"],
                "agent-beta": ['Action: Agent_Alpha("help me back")', "Final Answer: beta done"],
            }
        )
    )

    answer = await ReasoningLoop(generator, tool_executor).run(alpha, "go", [alpha, beta])

    assert answer == "alpha done"
    assert len(generator.calls) == 4
    beta_observation = generator.calls[2]["history"][-1].content
    assert "Agent 'Alpha' is already working on this request" in beta_observation


@pytest.mark.asyncio
async def test_delegation_depth_limit(agent_factory, generator_factory, tool_executor):
    top = agent_factory("agent-top", "Top", sub_agent_ids=["agent-middle"])
    middle = agent_factory("agent-middle", "Middle", sub_agent_ids=["agent-leaf"])
    leaf = agent_factory("agent-leaf", "Leaf")
    generator = generator_factory(
        default=route(
            {
                "agent-top": ['Action: Agent_Middle("task")', "Final Answer: top done"],
                "agent-middle": ['Action: Agent_Leaf("subtask")', "Final Answer: middle done"],
                "agent-leaf": ["Final Answer: leaf done"],
            }
        )
    )
    loop = ReasoningLoop(generator, tool_executor, max_delegation_depth=1)

    answer = await loop.run(top, "go", [top, middle, leaf])

    assert answer == "top done"
    middle_observation = generator.calls[2]["history"][-1].content
    assert "Maximum delegation depth of 1 reached" in middle_observation
    assert all("You are agent-leaf." not in call["history"][0].content for call in generator.calls)


@pytest.mark.asyncio
async def test_sub_agent_budget_exhaustion_is_an_answer(team, generator_factory, tool_executor):
    boss, worker = team
    generator = generator_factory(
        default=route(
            {
                "agent-boss": ['Action: Agent_Worker("loop forever")', "Final Answer: recovered"],
                "agent-worker": ['Action: GoogleSearch("x")', 'Action: GoogleSearch("y")'],
            }
        )
    )
    loop = ReasoningLoop(generator, tool_executor, max_steps=2)

    answer = await loop.run(boss, "go", [boss, worker])

    assert answer == "recovered"
    assert "maximum number of steps" in generator.calls[3]["history"][-1].content
