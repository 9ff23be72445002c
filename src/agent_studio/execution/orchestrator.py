"""Orchestrator for agent studio.

This module provides the control surface of the studio: it owns the agent
and pipeline catalogs, starts and stops runs, and exposes their states.
"""

from typing import Iterable, Optional

import httpx

from ..agent.base import ReasoningLoop
from ..agent.llm import LLMClient, TextGenerator
from ..config.defaults import PREDEFINED_AGENTS, PREDEFINED_PIPELINES
from ..config.schemas import StudioConfig
from ..models import Agent, ExecutionKind, ExecutionState, Pipeline
from ..tools import BuiltinToolExecutor, register_builtin_tools
from ..utils import get_logger
from ..utils.id import generate_agent_id
from .pipeline import PipelineScheduler
from .registry import ExecutionRegistry

logger = get_logger(__name__)


class AgentNotFoundError(LookupError):
    """Raised when an agent id is not in the catalog."""

    pass


class PipelineNotFoundError(LookupError):
    """Raised when a pipeline id is not in the catalog."""

    pass


class Orchestrator:
    """Control surface for agents, pipelines and their runs.

    Runs receive a snapshot of the agent catalog taken when they start, so
    editing the catalog never affects a run in flight.
    """

    def __init__(
        self,
        loop: ReasoningLoop,
        agents: Optional[Iterable[Agent]] = None,
        pipelines: Optional[Iterable[Pipeline]] = None,
        registry: Optional[ExecutionRegistry] = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            loop: Reasoning loop for agent runs and pipeline nodes
            agents: Initial agent catalog
            pipelines: Initial pipeline catalog
            registry: Execution registry, a fresh one if omitted
        """
        self.loop = loop
        self.scheduler = PipelineScheduler(loop)
        self.registry = registry or ExecutionRegistry()
        self._agents: dict[str, Agent] = {}
        self._pipelines: dict[str, Pipeline] = {}

        for agent in agents or []:
            self.add_agent(agent)
        for pipeline in pipelines or []:
            self.add_pipeline(pipeline)

    @classmethod
    def from_config(
        cls,
        config: StudioConfig,
        agents: Optional[Iterable[Agent]] = None,
        pipelines: Optional[Iterable[Pipeline]] = None,
        generator: Optional[TextGenerator] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "Orchestrator":
        """Create an orchestrator with the builtin tools.

        Args:
            config: Studio configuration
            agents: Agent catalog, the predefined agents if omitted
            pipelines: Pipeline catalog, the predefined pipelines if omitted
            generator: Text generator, an LLMClient for ``config.llm`` if omitted
            transport: httpx transport for the network tools

        Returns:
            Orchestrator instance
        """
        generator = generator or LLMClient(config.llm)
        registry = register_builtin_tools(generator, config.tools, transport)
        executor = BuiltinToolExecutor(registry, config.tools)
        loop = ReasoningLoop.from_config(config, generator, executor)
        return cls(
            loop,
            agents=PREDEFINED_AGENTS if agents is None else agents,
            pipelines=PREDEFINED_PIPELINES if pipelines is None else pipelines,
        )

    # Catalog: agents

    def list_agents(self) -> list[Agent]:
        return list(self._agents.values())

    def get_agent(self, agent_id: str) -> Agent:
        """Get an agent by id.

        Raises:
            AgentNotFoundError: If the agent does not exist
        """
        agent = self._agents.get(agent_id)
        if agent is None:
            raise AgentNotFoundError(f"Agent not found: {agent_id}")
        return agent

    def add_agent(self, agent: Agent) -> Agent:
        """Add an agent to the catalog.

        Raises:
            ValueError: If the id is already taken
        """
        if agent.id in self._agents:
            raise ValueError(f"Agent already exists: {agent.id}")
        self._agents[agent.id] = agent
        return agent

    def update_agent(self, agent: Agent) -> Agent:
        """Replace an agent with an edited version.

        Raises:
            AgentNotFoundError: If the agent does not exist
        """
        self.get_agent(agent.id)
        self._agents[agent.id] = agent
        return agent

    def duplicate_agent(self, agent_id: str) -> Agent:
        """Copy an agent under a fresh id.

        Args:
            agent_id: Agent to copy

        Returns:
            The copy, named "<name> (Copy)" and never predefined
        """
        source = self.get_agent(agent_id)
        copy = source.model_copy(
            deep=True,
            update={"id": generate_agent_id(), "name": f"{source.name} (Copy)", "is_predefined": False},
        )
        return self.add_agent(copy)

    def delete_agent(self, agent_id: str) -> None:
        """Delete an agent and every reference to it.

        The agent is dropped from meta-agents' sub-agent lists, its nodes
        (with their edges) are dropped from pipelines, and the execution
        states of the agent and of every changed pipeline are purged.

        Raises:
            AgentNotFoundError: If the agent does not exist
        """
        self.get_agent(agent_id)
        del self._agents[agent_id]
        self.registry.remove(agent_id)

        for other in self.list_agents():
            if agent_id in other.sub_agent_ids:
                self._agents[other.id] = other.model_copy(
                    update={"sub_agent_ids": [sub_id for sub_id in other.sub_agent_ids if sub_id != agent_id]}
                )

        for pipeline in self.list_pipelines():
            if pipeline.uses_agent(agent_id):
                self._pipelines[pipeline.id] = pipeline.without_agent(agent_id)
                self.registry.remove(pipeline.id)

        logger.info(f"Deleted agent {agent_id}")

    # Catalog: pipelines

    def list_pipelines(self) -> list[Pipeline]:
        return list(self._pipelines.values())

    def get_pipeline(self, pipeline_id: str) -> Pipeline:
        """Get a pipeline by id.

        Raises:
            PipelineNotFoundError: If the pipeline does not exist
        """
        pipeline = self._pipelines.get(pipeline_id)
        if pipeline is None:
            raise PipelineNotFoundError(f"Pipeline not found: {pipeline_id}")
        return pipeline

    def add_pipeline(self, pipeline: Pipeline) -> Pipeline:
        if pipeline.id in self._pipelines:
            raise ValueError(f"Pipeline already exists: {pipeline.id}")
        self._pipelines[pipeline.id] = pipeline
        return pipeline

    def update_pipeline(self, pipeline: Pipeline) -> Pipeline:
        self.get_pipeline(pipeline.id)
        self._pipelines[pipeline.id] = pipeline
        return pipeline

    def delete_pipeline(self, pipeline_id: str) -> None:
        self.get_pipeline(pipeline_id)
        del self._pipelines[pipeline_id]
        self.registry.remove(pipeline_id)
        logger.info(f"Deleted pipeline {pipeline_id}")

    # Runs

    def start_agent_run(self, agent_id: str, input_text: str) -> ExecutionState:
        """Start an agent run in the background.

        Args:
            agent_id: Agent to run
            input_text: User request

        Returns:
            The fresh ``running`` state

        Raises:
            AgentNotFoundError: If the agent does not exist
        """
        agent = self.get_agent(agent_id)
        agents = self.list_agents()

        async def runner(on_step, token) -> str:
            return await self.loop.run(agent, input_text, agents, on_step, token)

        return self.registry.start(agent_id, ExecutionKind.AGENT, runner, input_text)

    def start_pipeline_run(self, pipeline_id: str, input_text: str) -> ExecutionState:
        """Start a pipeline run in the background.

        Structural problems of the graph end the run with status ``error``.

        Args:
            pipeline_id: Pipeline to run
            input_text: Input for the root nodes

        Returns:
            The fresh ``running`` state

        Raises:
            PipelineNotFoundError: If the pipeline does not exist
        """
        pipeline = self.get_pipeline(pipeline_id)
        agents = self.list_agents()

        async def runner(on_step, token) -> str:
            return await self.scheduler.run(pipeline, input_text, agents, on_step, token)

        return self.registry.start(pipeline_id, ExecutionKind.PIPELINE, runner, input_text)

    def stop_run(self, item_id: str) -> bool:
        return self.registry.stop(item_id)

    def get_execution_state(self, item_id: str) -> Optional[ExecutionState]:
        return self.registry.get(item_id)

    async def wait_for_run(self, item_id: str) -> Optional[ExecutionState]:
        """Wait until the item's current run has finished.

        Returns:
            Final state of the run, or None if the item never ran
        """
        return await self.registry.wait(item_id)
