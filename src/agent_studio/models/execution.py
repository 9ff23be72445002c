"""Execution state entities for agent studio.

An execution state is the observable record of a run. The registry replaces
it with an updated copy on every change, so a state object handed to an
observer never changes underneath it.
"""

from datetime import datetime
from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field

from ..utils.id import generate_message_id, generate_run_id
from .steps import PipelineStep, ReActStep


class ExecutionStatus(str, Enum):
    """Status of a run."""

    RUNNING = "running"
    SUCCESS = "success"
    ERROR = "error"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self is not ExecutionStatus.RUNNING


class ExecutionKind(str, Enum):
    """Kind of item a run executes."""

    AGENT = "agent"
    PIPELINE = "pipeline"


class ChatMessage(BaseModel):
    """A user or agent turn in an agent run.

    Attributes:
        id: Message identifier
        role: "user" or "agent"
        content: User input, or the agent's final answer once known
        thinking_steps: Intermediate steps of the agent turn
    """

    id: str = Field(default_factory=generate_message_id)
    role: Literal["user", "agent"]
    content: str = ""
    thinking_steps: list[ReActStep] = Field(default_factory=list)


class ExecutionState(BaseModel):
    """Observable record of a run's progress, status and history.

    Attributes:
        item_id: Agent or pipeline id
        kind: Whether an agent or a pipeline runs
        run_id: Identifier of this particular run
        status: Current status
        history: Chat turns (agent runs) or node records (pipeline runs)
        output: Final result once the run succeeded
        error: Error or cancellation message
        started_at: Run start timestamp
        finished_at: Run end timestamp
    """

    item_id: str
    kind: ExecutionKind
    run_id: str = Field(default_factory=generate_run_id)
    status: ExecutionStatus = ExecutionStatus.RUNNING
    history: list[Union[ChatMessage, PipelineStep]] = Field(default_factory=list)
    output: Optional[str] = None
    error: Optional[str] = None
    started_at: datetime = Field(default_factory=datetime.now)
    finished_at: Optional[datetime] = None

    @property
    def is_running(self) -> bool:
        return self.status == ExecutionStatus.RUNNING

    @property
    def pipeline_steps(self) -> list[PipelineStep]:
        return [entry for entry in self.history if isinstance(entry, PipelineStep)]

    @property
    def react_steps(self) -> list[ReActStep]:
        """All intermediate agent steps recorded so far, in order."""
        steps: list[ReActStep] = []
        for entry in self.history:
            if isinstance(entry, ChatMessage):
                steps.extend(entry.thinking_steps)
        return steps

    @property
    def duration_seconds(self) -> Optional[float]:
        if self.finished_at is None:
            return None
        return (self.finished_at - self.started_at).total_seconds()
