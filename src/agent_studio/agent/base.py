"""Reasoning loop for agent studio.

This module drives one agent invocation through Thought -> Action ->
Observation cycles, including delegation from meta-agents to sub-agents.
"""

import json
from typing import Callable, Optional

from ..config.schemas import StudioConfig
from ..models import Agent, AgentStep, Message, ToolName
from ..tools.executor import ToolExecutor
from ..utils import CancellationToken, RunCancelledError, get_logger
from .llm import TextGenerator
from .parser import FinalAnswer, NoAction, ParsedCompletion, SubAgentCall, ToolAction, parse_completion
from .prompts import (
    CANCELLED_ANSWER,
    CANCELLED_THOUGHT,
    CORRECTIVE_FEEDBACK,
    MAX_STEPS_ANSWER,
    MAX_STEPS_THOUGHT,
    build_initial_message,
    build_system_instruction,
    observation_message,
)
from .supervisor import DelegationError, SubAgentDirectory

logger = get_logger(__name__)

StepCallback = Callable[[AgentStep, bool], None]

DEFAULT_MAX_STEPS = 10
DEFAULT_MAX_DELEGATION_DEPTH = 3


def render_action(name: str, args: str) -> str:
    """Render an action for display, e.g. ``GoogleSearch("weather")``."""
    return f"{name}({json.dumps(args, ensure_ascii=False)})"


def _ignore_step(step: AgentStep, is_final: bool) -> None:
    pass


class ReasoningLoop:
    """Runs agents against a text generator and a tool executor.

    Every run is independent: the loop itself holds no per-run state, so one
    instance can serve concurrent runs and recursive sub-agent calls.

    Example:
        loop = ReasoningLoop(llm_client, tool_executor)
        answer = await loop.run(agent, "What's new in Python?", agents, on_step, token)
    """

    def __init__(
        self,
        generator: TextGenerator,
        tool_executor: ToolExecutor,
        max_steps: int = DEFAULT_MAX_STEPS,
        max_delegation_depth: int = DEFAULT_MAX_DELEGATION_DEPTH,
    ) -> None:
        """Initialize the reasoning loop.

        Args:
            generator: Text generator for model calls
            tool_executor: Executor for enabled tools
            max_steps: Cycle budget per agent run
            max_delegation_depth: Maximum nested sub-agent levels
        """
        if max_steps < 1:
            raise ValueError("max_steps must be at least 1")
        self.generator = generator
        self.tool_executor = tool_executor
        self.max_steps = max_steps
        self.max_delegation_depth = max_delegation_depth

    @classmethod
    def from_config(
        cls,
        config: StudioConfig,
        generator: TextGenerator,
        tool_executor: ToolExecutor,
    ) -> "ReasoningLoop":
        return cls(
            generator,
            tool_executor,
            max_steps=config.max_steps,
            max_delegation_depth=config.max_delegation_depth,
        )

    async def run(
        self,
        agent: Agent,
        input_text: str,
        all_agents: list[Agent],
        on_step: Optional[StepCallback] = None,
        cancel_token: Optional[CancellationToken] = None,
        call_chain: tuple[str, ...] = (),
    ) -> str:
        """Run an agent until it gives a final answer or exhausts its budget.

        Every step, the terminal one included, is reported through
        ``on_step`` in order.

        Args:
            agent: Agent to run
            input_text: User request
            all_agents: Every known agent, for sub-agent resolution
            on_step: Callback receiving ``(step, is_final)``
            cancel_token: Token polled at every cycle and after every call
            call_chain: Ids of the agents that delegated to this run

        Returns:
            Final answer text

        Raises:
            RunCancelledError: If the token was cancelled
        """
        emit = on_step or _ignore_step
        token = cancel_token or CancellationToken()
        chain = call_chain + (agent.id,)

        directory = SubAgentDirectory(agent, all_agents)
        sub_agents = directory.permitted()
        system_instruction = build_system_instruction(agent, sub_agents)
        history: list[Message] = [build_initial_message(agent, input_text, sub_agents)]

        try:
            for cycle in range(1, self.max_steps + 1):
                token.raise_if_cancelled()
                logger.debug(f"Agent {agent.id} cycle {cycle}/{self.max_steps}")

                completion = await self.generator.generate(list(history), system_instruction, agent.model_params)
                token.raise_if_cancelled()

                if completion.citations:
                    logger.debug(
                        f"Agent {agent.id} received {len(completion.citations)} citations: "
                        + ", ".join(citation.uri for citation in completion.citations)
                    )
                history.append(Message(role="model", content=completion.text))

                parsed = parse_completion(completion.text)
                if isinstance(parsed.action, FinalAnswer):
                    emit(AgentStep(thought=parsed.thought, final_answer=parsed.action.text), True)
                    return parsed.action.text

                step = await self._act(agent, parsed, directory, token, chain)
                token.raise_if_cancelled()

                emit(step, False)
                history.append(observation_message(step.observation or ""))
        except RunCancelledError:
            logger.info(f"Agent {agent.id} run cancelled")
            emit(AgentStep(thought=CANCELLED_THOUGHT, final_answer=CANCELLED_ANSWER), True)
            raise

        logger.info(f"Agent {agent.id} reached the step budget of {self.max_steps}")
        emit(AgentStep(thought=MAX_STEPS_THOUGHT, final_answer=MAX_STEPS_ANSWER), True)
        return MAX_STEPS_ANSWER

    async def _act(
        self,
        agent: Agent,
        parsed: ParsedCompletion,
        directory: SubAgentDirectory,
        token: CancellationToken,
        chain: tuple[str, ...],
    ) -> AgentStep:
        """Carry out a non-final action and build its step."""
        action = parsed.action

        if isinstance(action, NoAction):
            thought = parsed.raw.strip() or parsed.thought
            return AgentStep(thought=thought, observation=CORRECTIVE_FEEDBACK)

        rendered = render_action(action.name, action.args)

        if isinstance(action, ToolAction) and agent.has_tool(action.name):
            observation = await self._execute_tool(agent, action)
            return AgentStep(thought=parsed.thought, action=rendered, observation=observation)

        if isinstance(action, SubAgentCall) and agent.is_meta:
            observation = await self._delegate(action, directory, token, chain)
            return AgentStep(thought=parsed.thought, action=rendered, observation=observation)

        return AgentStep(thought=parsed.thought, action=rendered, observation=self._unavailable(action.name))

    async def _execute_tool(self, agent: Agent, action: ToolAction) -> str:
        try:
            return await self.tool_executor.execute(action.name, action.args)
        except Exception as e:
            logger.warning(f"Agent {agent.id} tool {action.name} raised: {e}")
            return f"Error: Tool '{action.name}' failed: {e}"

    async def _delegate(
        self,
        call: SubAgentCall,
        directory: SubAgentDirectory,
        token: CancellationToken,
        chain: tuple[str, ...],
    ) -> str:
        """Run a sub-agent and return its final answer as the observation.

        The sub-agent's intermediate steps are consumed here and never reach
        the caller's ``on_step``.
        """
        try:
            sub_agent = directory.resolve(call, chain, self.max_delegation_depth)
        except DelegationError as e:
            return str(e)

        logger.debug(f"Agent {chain[-1]} delegates to {sub_agent.id}")
        return await self.run(
            sub_agent,
            call.args,
            directory.all_agents,
            on_step=_ignore_step,
            cancel_token=token,
            call_chain=chain,
        )

    @staticmethod
    def _unavailable(name: str) -> str:
        """Observation for a tool the agent cannot use."""
        if name in {tool.value for tool in ToolName}:
            return f"The tool '{name}' is not enabled for this agent. {CORRECTIVE_FEEDBACK}"
        return f"'{name}' is not an available tool. {CORRECTIVE_FEEDBACK}"
