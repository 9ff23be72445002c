#!/usr/bin/env python3
"""
Research Pipeline Demo

Runs the predefined research-then-write pipeline and prints every node as it
finishes, then asks the Research Team meta-agent the same question.

Run this demo:
    python examples/demo/research_pipeline_demo.py "the history of the bicycle"

Or with custom settings:
    OPENAI_BASE_URL=https://api.siliconflow.cn/v1 \
    OPENAI_API_KEY=your-key \
    DEFAULT_MODEL=Qwen/Qwen3-8B \
    python examples/demo/research_pipeline_demo.py
"""

import asyncio
import os
import sys

from dotenv import load_dotenv

from agent_studio.config.schemas import LLMConfig, StudioConfig
from agent_studio.execution import Orchestrator
from agent_studio.models import ExecutionStatus
from agent_studio.utils import setup_logging

load_dotenv()


async def run_demo(topic: str) -> None:
    """Run the pipeline, then the meta-agent, on one topic."""

    print("=" * 70)
    print("Agent Studio - Research Pipeline Demo")
    print("=" * 70)

    if not os.environ.get("OPENAI_API_KEY"):
        print("OPENAI_API_KEY is not set. Put it in your .env file or environment.")
        return

    config = StudioConfig(
        llm=LLMConfig(
            endpoint=os.environ.get("OPENAI_BASE_URL", "https://api.openai.com/v1"),
            model=os.environ.get("DEFAULT_MODEL", "gpt-4o-mini"),
        ),
        max_steps=6,
    )
    orchestrator = Orchestrator.from_config(config)

    print(f"\nPipeline input: {topic}\n")
    orchestrator.start_pipeline_run("pipeline-research-write-1", topic)
    state = await orchestrator.wait_for_run("pipeline-research-write-1")

    for step in state.pipeline_steps:
        print(f"--- {step.agent_name} ({step.node_id}): {len(step.react_steps)} tool steps")
        print(step.output)
        print()

    if state.status != ExecutionStatus.SUCCESS:
        print(f"Pipeline {state.status.value}: {state.error}")
        return

    print("=" * 70)
    print("Asking the Research Team meta-agent")
    print("=" * 70)
    orchestrator.start_agent_run("agent-research-team-5", f"Write a short, sourced piece about {topic}.")
    state = await orchestrator.wait_for_run("agent-research-team-5")

    for index, step in enumerate(state.react_steps, start=1):
        print(f"[Step {index}] {step.action or step.thought}")
    print(f"\n{state.status.value}: {state.output or state.error}")


if __name__ == "__main__":
    setup_logging("WARNING")
    asyncio.run(run_demo(" ".join(sys.argv[1:]) or "the history of the bicycle"))
