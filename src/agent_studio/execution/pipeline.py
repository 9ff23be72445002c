"""Pipeline scheduler for agent studio.

Runs a pipeline graph one node at a time in topological order. Each node
runs its agent through the reasoning loop on the outputs of its parents.
"""

from collections import deque
from typing import Callable, Optional

import networkx as nx

from ..agent.base import ReasoningLoop
from ..models import Agent, AgentStep, Pipeline, PipelineStep, ReActStep
from ..utils import CancellationToken, RunCancelledError, get_logger

logger = get_logger(__name__)

PipelineStepCallback = Callable[[PipelineStep], None]

FAN_IN_HEADER = (
    "You are receiving the outputs of {count} preceding agents. "
    "Each input is listed in its own section below. Use all of them to complete your task."
)


class PipelineStructureError(Exception):
    """Raised when a pipeline graph cannot be run."""

    pass


def build_graph(pipeline: Pipeline) -> nx.DiGraph:
    """Build the directed graph of a pipeline.

    Args:
        pipeline: Pipeline definition

    Returns:
        Graph with one vertex per node and one arc per edge

    Raises:
        PipelineStructureError: If the pipeline is empty, has duplicate node
            ids, or an edge references an unknown node
    """
    if not pipeline.nodes:
        raise PipelineStructureError(f"Pipeline '{pipeline.name}' has no nodes")

    graph = nx.DiGraph()
    for node in pipeline.nodes:
        if node.id in graph:
            raise PipelineStructureError(f"Duplicate node id '{node.id}' in pipeline '{pipeline.name}'")
        graph.add_node(node.id, agent_id=node.agent_id)

    for edge in pipeline.edges:
        for end in (edge.source, edge.target):
            if end not in graph:
                raise PipelineStructureError(f"Edge '{edge.id}' references unknown node '{end}'")
        graph.add_edge(edge.source, edge.target)

    return graph


def topological_order(pipeline: Pipeline) -> list[str]:
    """Compute the execution order of a pipeline with Kahn's algorithm.

    Ties are broken by node order, so the same pipeline always runs in the
    same order.

    Args:
        pipeline: Pipeline definition

    Returns:
        Node ids in execution order

    Raises:
        PipelineStructureError: If the graph is invalid or contains a cycle
    """
    graph = build_graph(pipeline)

    in_degree = {node.id: 0 for node in pipeline.nodes}
    successors: dict[str, list[str]] = {node.id: [] for node in pipeline.nodes}
    for edge in pipeline.edges:
        in_degree[edge.target] += 1
        successors[edge.source].append(edge.target)

    ready = deque(node.id for node in pipeline.nodes if in_degree[node.id] == 0)
    order: list[str] = []
    while ready:
        node_id = ready.popleft()
        order.append(node_id)
        for successor in successors[node_id]:
            in_degree[successor] -= 1
            if in_degree[successor] == 0:
                ready.append(successor)

    if len(order) < len(pipeline.nodes):
        cycle = nx.find_cycle(graph)
        path = " -> ".join([source for source, _ in cycle] + [cycle[0][0]])
        raise PipelineStructureError(f"Pipeline '{pipeline.name}' contains a cycle: {path}")

    return order


def build_node_input(
    pipeline: Pipeline,
    node_id: str,
    outputs: dict[str, str],
    initial_input: str,
    agent_names: dict[str, str],
) -> str:
    """Build the input text for a node.

    Args:
        pipeline: Pipeline definition
        node_id: Node about to run
        outputs: Final answers of the nodes run so far
        initial_input: The pipeline's original input
        agent_names: Agent display names by agent id

    Returns:
        The original input for a root node, the parent's output verbatim for
        a single parent, and one numbered section per parent otherwise
    """
    incoming = pipeline.incoming_edges(node_id)
    if not incoming:
        return initial_input
    if len(incoming) == 1:
        return outputs[incoming[0].source]

    sections = [FAN_IN_HEADER.format(count=len(incoming))]
    for index, edge in enumerate(incoming, start=1):
        parent = pipeline.get_node(edge.source)
        name = agent_names.get(parent.agent_id, parent.agent_id) if parent else edge.source
        sections.append(f'### Input {index} from "{name}" (node {edge.source})\n{outputs[edge.source]}')
    return "\n\n".join(sections)


class PipelineScheduler:
    """Runs pipelines through a reasoning loop.

    Nodes run strictly one after another. A node starts only after all of its
    parents have recorded their output.
    """

    def __init__(self, loop: ReasoningLoop) -> None:
        """Initialize the scheduler.

        Args:
            loop: Reasoning loop used for every node
        """
        self.loop = loop

    async def run(
        self,
        pipeline: Pipeline,
        initial_input: str,
        all_agents: list[Agent],
        on_step: Optional[PipelineStepCallback] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> str:
        """Run a pipeline.

        Args:
            pipeline: Pipeline to run
            initial_input: Input for the root nodes
            all_agents: Every known agent
            on_step: Callback receiving one PipelineStep per node
            cancel_token: Token checked before every node

        Returns:
            Output of the last node in execution order

        Raises:
            PipelineStructureError: If the graph is invalid or a node's agent
                does not exist
            RunCancelledError: If the token was cancelled
        """
        token = cancel_token or CancellationToken()
        order = topological_order(pipeline)
        agents = {agent.id: agent for agent in all_agents}
        agent_names = {agent.id: agent.name for agent in all_agents}
        outputs: dict[str, str] = {}

        logger.info(f"Running pipeline {pipeline.id} with {len(order)} nodes")

        for position, node_id in enumerate(order, start=1):
            token.raise_if_cancelled()

            node = pipeline.get_node(node_id)
            agent = agents.get(node.agent_id)
            if agent is None:
                raise PipelineStructureError(f"Agent '{node.agent_id}' for node '{node_id}' was not found")

            node_input = build_node_input(pipeline, node_id, outputs, initial_input, agent_names)
            react_steps: list[ReActStep] = []

            def collect(step: AgentStep, is_final: bool) -> None:
                if not is_final:
                    react_steps.append(step.to_react_step())

            logger.debug(f"Pipeline {pipeline.id} node {position}/{len(order)}: {node_id} ({agent.id})")
            try:
                output = await self.loop.run(agent, node_input, all_agents, collect, token)
            except RunCancelledError:
                logger.info(f"Pipeline {pipeline.id} cancelled at node {node_id}")
                raise

            outputs[node_id] = output
            if on_step is not None:
                on_step(
                    PipelineStep(
                        node_id=node_id,
                        agent_id=agent.id,
                        agent_name=agent.name,
                        input=node_input,
                        output=output,
                        react_steps=react_steps,
                    )
                )

        return outputs[order[-1]]
