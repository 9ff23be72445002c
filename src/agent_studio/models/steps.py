"""Step entities emitted while agents and pipelines run."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ReActStep(BaseModel):
    """One Thought -> Action -> Observation cycle.

    Attributes:
        thought: Model reasoning for the cycle
        action: Rendered action, e.g. ``GoogleSearch("weather")``
        observation: Result fed back to the model
    """

    model_config = ConfigDict(frozen=True)

    thought: str
    action: Optional[str] = None
    observation: Optional[str] = None


class AgentStep(BaseModel):
    """Step reported by the reasoning loop through ``on_step``.

    Terminal steps carry ``final_answer``. The others carry an observation.
    """

    model_config = ConfigDict(frozen=True)

    thought: str
    action: Optional[str] = None
    observation: Optional[str] = None
    final_answer: Optional[str] = None

    @property
    def is_final(self) -> bool:
        return self.final_answer is not None

    def to_react_step(self) -> ReActStep:
        return ReActStep(thought=self.thought, action=self.action, observation=self.observation)


class PipelineStep(BaseModel):
    """Record of one pipeline node run.

    Attributes:
        node_id: Node that ran
        agent_id: Agent the node ran
        agent_name: Agent display name
        input: Text the agent received
        output: Final answer of the agent
        react_steps: Intermediate steps of the agent run
    """

    model_config = ConfigDict(frozen=True)

    node_id: str
    agent_id: str
    agent_name: str = ""
    input: str
    output: str
    react_steps: list[ReActStep] = Field(default_factory=list)
