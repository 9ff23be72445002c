"""Prompt text used by the reasoning loop."""

from datetime import date
from typing import Optional

from ..models import Agent, Message

CORRECTIVE_FEEDBACK = (
    "That was not a valid Action or Final Answer. You must use the format "
    "'Action: ToolName(args)' or 'Final Answer: [your answer]'. Please try again."
)

MAX_STEPS_THOUGHT = "Max steps reached."
MAX_STEPS_ANSWER = "I have reached the maximum number of steps and could not find a conclusive answer."
CANCELLED_THOUGHT = "Execution was cancelled by the user."
CANCELLED_ANSWER = "Execution cancelled."

PROTOCOL_TEMPLATE = """You are an agent that solves tasks by reasoning step by step and using tools.

Respond in exactly one of these two formats.

To use a tool:
Thought: [your reasoning for the action]
Action: ToolName("argument")

When you know the answer:
Thought: [your final reasoning]
Final Answer: [your conclusive response]

Use exactly one Action per response and wait for its Observation before continuing.

{tools}"""


def build_system_instruction(agent: Agent, sub_agents: Optional[list[Agent]] = None) -> str:
    """Build the fixed response protocol for an agent.

    Args:
        agent: Agent being run
        sub_agents: Agents the agent may call, for meta-agents

    Returns:
        System instruction text listing the callable tools
    """
    lines = [f"- {tool.name.value}: {tool.description}" for tool in agent.enabled_tools()]
    for sub_agent in sub_agents or []:
        lines.append(f"- {sub_agent.tool_name}: {sub_agent.description}")

    if lines:
        tools = "Available tools:\n" + "\n".join(lines)
    else:
        tools = "You have no tools. Answer directly with a Final Answer."
    return PROTOCOL_TEMPLATE.format(tools=tools)


def describe_sub_agents(sub_agents: list[Agent]) -> str:
    """Descriptor lines naming each sub-agent as an invocable pseudo-tool."""
    lines = [
        "You can delegate tasks to the following agents. Call them like a tool, "
        'e.g. Action: Agent_Name("task for the agent"):'
    ]
    for sub_agent in sub_agents:
        lines.append(f"- {sub_agent.tool_name}: {sub_agent.description}")
    return "\n".join(lines)


def build_initial_message(
    agent: Agent,
    input_text: str,
    sub_agents: Optional[list[Agent]] = None,
    today: Optional[date] = None,
) -> Message:
    """Build turn 0 of the conversation.

    Args:
        agent: Agent being run
        input_text: User request
        sub_agents: Agents the agent may call, for meta-agents
        today: Date to announce, defaults to the current date

    Returns:
        User message with text documents inlined and binary documents attached
    """
    today = today or date.today()
    sections = [
        f"Current date is {today.isoformat()}. You must use this date to interpret any "
        'time-relative queries from the user (e.g., "last week", "today").',
        agent.system_prompt,
    ]

    if sub_agents:
        sections.append(describe_sub_agents(sub_agents))

    text_documents = [doc for doc in agent.documents if not doc.is_binary]
    for doc in text_documents:
        sections.append(f'--- Document: "{doc.name}" ---\n{doc.content}\n--- End of document ---')

    sections.append(f"Here is the user's request:\n{input_text}")

    return Message(
        role="user",
        content="\n\n".join(sections),
        attachments=[doc for doc in agent.documents if doc.is_binary],
    )


def observation_message(observation: str) -> Message:
    return Message(role="user", content=f"Observation: {observation}")
