"""Execution registry for agent studio.

Keeps the current execution state of every agent and pipeline together with
the handle of its in-flight run. Runs execute as asyncio tasks, so a caller
can start a run, move on, and come back later to observe or stop it.
"""

import asyncio
from datetime import datetime
from typing import Any, Awaitable, Callable, Optional

from ..models import (
    AgentStep,
    ChatMessage,
    ExecutionKind,
    ExecutionState,
    ExecutionStatus,
    PipelineStep,
)
from ..utils import CancellationToken, RunCancelledError, get_logger, run_extra

logger = get_logger(__name__)

CANCELLED_MESSAGE = "Execution cancelled by user."

# Receives the step callback and the cancellation token, returns the final output
Runner = Callable[[Callable[..., None], CancellationToken], Awaitable[str]]


class RunHandle:
    """Ownership handle of one run.

    Only the run whose handle is currently registered for an item may write
    to that item's state.
    """

    def __init__(self, item_id: str, kind: ExecutionKind, run_id: str) -> None:
        self.item_id = item_id
        self.kind = kind
        self.run_id = run_id
        self.token = CancellationToken()
        self.task: Optional[asyncio.Task[None]] = None

    def __repr__(self) -> str:
        return f"RunHandle(item_id={self.item_id!r}, run_id={self.run_id!r}, cancelled={self.token.cancelled})"


class ExecutionRegistry:
    """Map from item id to its execution state and run handle.

    States are immutable snapshots. Every update replaces the stored state
    with a modified copy, so a state returned by ``get`` never changes.

    Example:
        registry = ExecutionRegistry()
        registry.start("agent-1", ExecutionKind.AGENT, runner, "Hello")
        state = await registry.wait("agent-1")
    """

    def __init__(self) -> None:
        self._states: dict[str, ExecutionState] = {}
        self._handles: dict[str, RunHandle] = {}

    def start(
        self,
        item_id: str,
        kind: ExecutionKind,
        runner: Runner,
        user_input: str = "",
    ) -> ExecutionState:
        """Start a run, replacing any earlier run of the same item.

        Must be called from within a running event loop.

        Args:
            item_id: Agent or pipeline id
            kind: Kind of item
            runner: Coroutine function running the engine
            user_input: Input text, recorded as the user turn of agent runs

        Returns:
            The fresh ``running`` state
        """
        self.stop(item_id)

        history: list[Any] = []
        if kind == ExecutionKind.AGENT:
            history = [ChatMessage(role="user", content=user_input), ChatMessage(role="agent")]
        state = ExecutionState(item_id=item_id, kind=kind, history=history)

        handle = RunHandle(item_id, kind, state.run_id)
        self._handles[item_id] = handle
        self._states[item_id] = state

        on_step = self._agent_step_sink(handle) if kind == ExecutionKind.AGENT else self._pipeline_step_sink(handle)
        handle.task = asyncio.create_task(self._drive(handle, runner, on_step), name=f"run-{item_id}")

        logger.info(f"Started {kind.value} run", extra=run_extra(item_id, state.run_id))
        return state

    def stop(self, item_id: str) -> bool:
        """Request cancellation of the item's run. Does not wait for it.

        Args:
            item_id: Agent or pipeline id

        Returns:
            True if a run was in flight
        """
        handle = self._handles.get(item_id)
        if handle is None or handle.task is None or handle.task.done():
            return False

        handle.token.cancel("stopped")
        logger.info(f"Stop requested for {item_id}")
        return True

    def get(self, item_id: str) -> Optional[ExecutionState]:
        return self._states.get(item_id)

    def remove(self, item_id: str) -> None:
        """Stop the item's run and forget its state.

        The stopped run can no longer write anything.
        """
        self.stop(item_id)
        self._handles.pop(item_id, None)
        if self._states.pop(item_id, None) is not None:
            logger.debug(f"Removed execution state for {item_id}")

    def is_running(self, item_id: str) -> bool:
        state = self._states.get(item_id)
        return state is not None and state.is_running

    def list_states(self) -> list[ExecutionState]:
        return list(self._states.values())

    async def wait(self, item_id: str) -> Optional[ExecutionState]:
        """Wait for the item's current run to finish.

        Args:
            item_id: Agent or pipeline id

        Returns:
            The item's state afterwards, or None if it has none
        """
        handle = self._handles.get(item_id)
        if handle is not None and handle.task is not None:
            await asyncio.wait({handle.task})
        return self.get(item_id)

    async def shutdown(self) -> None:
        """Stop every run and wait for all of them to finish."""
        tasks = []
        for item_id, handle in list(self._handles.items()):
            self.stop(item_id)
            if handle.task is not None:
                tasks.append(handle.task)
        if tasks:
            await asyncio.wait(tasks)

    def _owns(self, handle: RunHandle) -> bool:
        return self._handles.get(handle.item_id) is handle

    def _update(self, handle: RunHandle, **changes: Any) -> None:
        if not self._owns(handle):
            return
        self._states[handle.item_id] = self._states[handle.item_id].model_copy(update=changes)

    def _agent_step_sink(self, handle: RunHandle) -> Callable[[AgentStep, bool], None]:
        def on_step(step: AgentStep, is_final: bool) -> None:
            if not self._owns(handle):
                return
            history = list(self._states[handle.item_id].history)
            turn = history[-1]
            if is_final:
                history[-1] = turn.model_copy(update={"content": step.final_answer or ""})
            else:
                history[-1] = turn.model_copy(update={"thinking_steps": [*turn.thinking_steps, step.to_react_step()]})
            self._update(handle, history=history)

        return on_step

    def _pipeline_step_sink(self, handle: RunHandle) -> Callable[[PipelineStep], None]:
        def on_step(step: PipelineStep) -> None:
            if self._owns(handle):
                self._update(handle, history=[*self._states[handle.item_id].history, step])

        return on_step

    async def _drive(self, handle: RunHandle, runner: Runner, on_step: Callable[..., None]) -> None:
        """Run the engine and record its outcome."""
        try:
            output = await runner(on_step, handle.token)
        except RunCancelledError:
            logger.info("Run cancelled", extra=run_extra(handle.item_id, handle.run_id))
            self._update(handle, status=ExecutionStatus.CANCELLED, error=CANCELLED_MESSAGE, finished_at=datetime.now())
        except Exception as e:
            logger.error(f"Run failed: {e}", extra=run_extra(handle.item_id, handle.run_id))
            self._update(handle, status=ExecutionStatus.ERROR, error=str(e), finished_at=datetime.now())
        else:
            logger.info("Run succeeded", extra=run_extra(handle.item_id, handle.run_id))
            self._update(handle, status=ExecutionStatus.SUCCESS, output=output, finished_at=datetime.now())
