"""Sub-agent delegation for meta-agents.

A meta-agent calls the agents listed in its ``sub_agent_ids`` as pseudo-tools
named ``Agent_<Name>``. This module resolves those calls and enforces the
delegation limits. The recursive run itself is done by the reasoning loop.
"""

from typing import Optional

from ..models import Agent
from ..utils import get_logger
from .parser import SubAgentCall

logger = get_logger(__name__)


class DelegationError(Exception):
    """A sub-agent call that cannot be carried out.

    The message is meant to be shown to the calling model as an observation.
    """

    pass


class SubAgentDirectory:
    """Resolves sub-agent calls for one meta-agent.

    Example:
        directory = SubAgentDirectory(agent, all_agents)
        sub_agent = directory.resolve(call, call_chain=(agent.id,), max_depth=3)
    """

    def __init__(self, agent: Agent, all_agents: list[Agent]) -> None:
        """Initialize the directory.

        Args:
            agent: Calling agent
            all_agents: Every agent known to the studio
        """
        self.agent = agent
        self.all_agents = all_agents
        self._by_id = {candidate.id: candidate for candidate in all_agents}

    def permitted(self) -> list[Agent]:
        """Get the sub-agents the calling agent may invoke.

        Returns:
            Existing agents from ``sub_agent_ids``, in listed order. Empty for
            agents that are not meta-agents.
        """
        if not self.agent.is_meta:
            return []
        return [self._by_id[agent_id] for agent_id in self.agent.sub_agent_ids if agent_id in self._by_id]

    def find(self, tool_name: str) -> Optional[Agent]:
        """Find an agent by its ``Agent_<Name>`` pseudo-tool name.

        Listed sub-agents win over other agents with the same name.
        """
        matches = [candidate for candidate in self.all_agents if candidate.tool_name == tool_name]
        for candidate in matches:
            if self.agent.permits_sub_agent(candidate.id):
                return candidate
        return matches[0] if matches else None

    def resolve(self, call: SubAgentCall, call_chain: tuple[str, ...], max_depth: int) -> Agent:
        """Resolve a sub-agent call to the agent to run.

        Args:
            call: Parsed sub-agent call
            call_chain: Ids of the agents on the active call chain, caller last
            max_depth: Maximum number of nested sub-agent levels

        Returns:
            Sub-agent to run

        Raises:
            DelegationError: If the agent is unknown, not permitted, already on
                the call chain, or the depth limit is reached
        """
        sub_agent = self.find(call.name)
        if sub_agent is None:
            raise DelegationError(f"Error: Sub-agent '{call.agent_slug}' was not found.")

        if not self.agent.permits_sub_agent(sub_agent.id):
            raise DelegationError(
                f"Error: Agent '{sub_agent.name}' is not one of your permitted sub-agents."
            )

        if sub_agent.id in call_chain:
            logger.warning(f"Refusing recursive delegation to {sub_agent.id} (chain: {' -> '.join(call_chain)})")
            raise DelegationError(
                f"Error: Agent '{sub_agent.name}' is already working on this request "
                "and cannot be called again. Solve this part yourself."
            )

        if len(call_chain) > max_depth:
            logger.warning(f"Delegation depth limit {max_depth} reached at {self.agent.id}")
            raise DelegationError(
                f"Error: Maximum delegation depth of {max_depth} reached. "
                f"Agent '{sub_agent.name}' cannot be called from here. Solve this part yourself."
            )

        return sub_agent
