"""Pipeline entity for agent studio.

This module defines the Pipeline entity: a directed graph of agent nodes.
"""

from typing import Optional

from pydantic import Field

from .agent import CatalogModel


class Position(CatalogModel):
    """Canvas position of a node."""

    x: float = 0
    y: float = 0


class PipelineNode(CatalogModel):
    """Definition of a pipeline node.

    Attributes:
        id: Node identifier, unique within the pipeline
        agent_id: Agent run by this node
        position: Layout position on the canvas
    """

    id: str = Field(..., min_length=1, description="Node identifier")
    agent_id: str = Field(..., description="Agent run by this node")
    position: Position = Field(default_factory=Position)


class PipelineEdge(CatalogModel):
    """Definition of a pipeline edge.

    Attributes:
        id: Edge identifier
        source: Source node id
        target: Target node id
    """

    id: str = Field(..., description="Edge identifier")
    source: str = Field(..., description="Source node id")
    target: str = Field(..., description="Target node id")


class Pipeline(CatalogModel):
    """Represents a graph of agent invocations.

    Multiple edges may start at (fan-out) or end at (fan-in) the same node.
    The graph must be acyclic to run.

    Attributes:
        id: Unique pipeline identifier
        name: Display name
        description: Short description
        nodes: Graph nodes
        edges: Graph edges, in authoring order
        predefined_questions: Suggested pipeline inputs
    """

    id: str = Field(..., min_length=1, description="Unique pipeline identifier")
    name: str = Field(..., min_length=1, description="Display name")
    description: str = Field(default="", description="Short description")
    nodes: list[PipelineNode] = Field(default_factory=list, description="Graph nodes")
    edges: list[PipelineEdge] = Field(default_factory=list, description="Graph edges")
    predefined_questions: list[str] = Field(default_factory=list, description="Suggested inputs")

    def get_node(self, node_id: str) -> Optional[PipelineNode]:
        """Get a node by id.

        Args:
            node_id: Node identifier

        Returns:
            Node or None if not found
        """
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def incoming_edges(self, node_id: str) -> list[PipelineEdge]:
        """Get all edges ending at a node, in edge order.

        Args:
            node_id: Target node id

        Returns:
            List of edges into this node
        """
        return [edge for edge in self.edges if edge.target == node_id]

    def uses_agent(self, agent_id: str) -> bool:
        """Check whether any node runs the given agent."""
        return any(node.agent_id == agent_id for node in self.nodes)

    def without_agent(self, agent_id: str) -> "Pipeline":
        """Remove every node running ``agent_id`` together with its edges.

        Args:
            agent_id: Agent to remove

        Returns:
            Updated pipeline (immutable pattern)
        """
        removed = {node.id for node in self.nodes if node.agent_id == agent_id}
        return self.model_copy(
            update={
                "nodes": [node for node in self.nodes if node.id not in removed],
                "edges": [
                    edge for edge in self.edges if edge.source not in removed and edge.target not in removed
                ],
            }
        )

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)
