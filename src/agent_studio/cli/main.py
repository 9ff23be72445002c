"""Main CLI entry point for agent studio.

This module provides the command-line interface for listing the catalog and
running agents and pipelines.
"""

import asyncio
import json
from pathlib import Path
from typing import Optional

import click
from dotenv import load_dotenv
from tabulate import tabulate

from .. import __version__
from ..config import PREDEFINED_AGENTS, PREDEFINED_PIPELINES, dump_catalog, load_catalog, load_studio_config
from ..config.schemas import StudioConfig
from ..execution import AgentNotFoundError, Orchestrator, PipelineNotFoundError
from ..models import ExecutionKind, ExecutionState, ExecutionStatus, PipelineStep, ReActStep
from ..utils import get_logger, setup_logging

logger = get_logger(__name__)

POLL_INTERVAL_SECONDS = 0.1
OBSERVATION_PREVIEW_CHARS = 500


def _preview(text: str, limit: int = OBSERVATION_PREVIEW_CHARS) -> str:
    text = text.strip()
    return text if len(text) <= limit else text[:limit] + "..."


def _load_orchestrator(ctx: click.Context) -> Orchestrator:
    """Build the orchestrator from the CLI options."""
    config: StudioConfig = ctx.obj["config"]
    catalog_path = ctx.obj.get("catalog") or config.catalog_path

    if catalog_path:
        agents, pipelines = load_catalog(catalog_path)
    else:
        agents, pipelines = PREDEFINED_AGENTS, PREDEFINED_PIPELINES

    return Orchestrator.from_config(config, agents=agents, pipelines=pipelines)


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), help="Settings file")
@click.option("--catalog", "catalog_path", type=click.Path(exists=True, dir_okay=False), help="Agents and pipelines file")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Log level (overrides the settings file)",
)
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Optional[str],
    catalog_path: Optional[str],
    verbose: bool,
    log_level: Optional[str],
) -> None:
    """Agent Studio CLI.

    Define agents and pipelines of agents, then run them against an
    OpenAI-compatible model with tools and sub-agent delegation.
    """
    load_dotenv()

    try:
        config = load_studio_config(config_path)
    except Exception as e:
        raise click.ClickException(f"Error loading settings: {e}")

    level = "DEBUG" if verbose else (log_level or config.logging.level)
    setup_logging(
        level=level.upper(),
        format_type=config.logging.format,
        use_colors=config.logging.use_colors,
        log_file=config.logging.log_file,
    )

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["catalog"] = catalog_path
    ctx.obj["verbose"] = verbose


@main.command()
@click.argument("agent_id", required=False)
@click.option("--format", "output_format", type=click.Choice(["table", "json"]), default="table", help="Output format")
@click.pass_context
def agents(ctx: click.Context, agent_id: Optional[str], output_format: str) -> None:
    """List agents, or show one agent.

    If AGENT_ID is provided, show that agent. Otherwise, list all agents.
    """
    orchestrator = _load_orchestrator(ctx)

    if agent_id:
        try:
            agent = orchestrator.get_agent(agent_id)
        except AgentNotFoundError as e:
            raise click.ClickException(str(e))

        if output_format == "json":
            click.echo(agent.model_dump_json(indent=2, by_alias=True))
            return

        click.echo(f"Agent: {agent.name} ({agent.id})")
        click.echo(f"Description: {agent.description or '-'}")
        click.echo(f"Model: {agent.model or 'default'}")
        click.echo(f"Tools: {', '.join(tool.name.value for tool in agent.enabled_tools()) or 'none'}")
        if agent.is_meta:
            click.echo(f"Sub-agents: {', '.join(agent.sub_agent_ids) or 'none'}")
        if agent.documents:
            click.echo(f"Documents: {', '.join(doc.name for doc in agent.documents)}")
        click.echo(f"\n{agent.system_prompt}")
        return

    catalog = orchestrator.list_agents()
    if output_format == "json":
        click.echo(json.dumps([agent.model_dump(mode="json", by_alias=True) for agent in catalog], indent=2))
    elif catalog:
        rows = [
            [
                agent.id,
                agent.name,
                "meta" if agent.is_meta else "agent",
                ", ".join(tool.name.value for tool in agent.enabled_tools()) or "-",
            ]
            for agent in catalog
        ]
        click.echo(tabulate(rows, headers=["ID", "Name", "Type", "Tools"], tablefmt="grid"))
    else:
        click.echo("No agents found.")


@main.command()
@click.argument("pipeline_id", required=False)
@click.option("--format", "output_format", type=click.Choice(["table", "json"]), default="table", help="Output format")
@click.pass_context
def pipelines(ctx: click.Context, pipeline_id: Optional[str], output_format: str) -> None:
    """List pipelines, or show one pipeline.

    If PIPELINE_ID is provided, show that pipeline. Otherwise, list all pipelines.
    """
    orchestrator = _load_orchestrator(ctx)

    if pipeline_id:
        try:
            pipeline = orchestrator.get_pipeline(pipeline_id)
        except PipelineNotFoundError as e:
            raise click.ClickException(str(e))

        if output_format == "json":
            click.echo(pipeline.model_dump_json(indent=2, by_alias=True))
            return

        click.echo(f"Pipeline: {pipeline.name} ({pipeline.id})")
        click.echo(f"Description: {pipeline.description or '-'}")
        click.echo(f"Nodes: {pipeline.node_count}")
        click.echo(f"Edges: {pipeline.edge_count}")
        rows = [[node.id, node.agent_id] for node in pipeline.nodes]
        click.echo(tabulate(rows, headers=["Node", "Agent"], tablefmt="grid"))
        for edge in pipeline.edges:
            click.echo(f"  {edge.source} -> {edge.target}")
        return

    catalog = orchestrator.list_pipelines()
    if output_format == "json":
        click.echo(json.dumps([pipeline.model_dump(mode="json", by_alias=True) for pipeline in catalog], indent=2))
    elif catalog:
        rows = [[p.id, p.name, p.node_count, p.edge_count] for p in catalog]
        click.echo(tabulate(rows, headers=["ID", "Name", "Nodes", "Edges"], tablefmt="grid"))
    else:
        click.echo("No pipelines found.")


def _echo_react_step(index: int, step: ReActStep, indent: str = "") -> None:
    click.echo(f"{indent}[Step {index}] Thought: {_preview(step.thought)}")
    if step.action:
        click.echo(f"{indent}  Action: {step.action}")
    if step.observation:
        click.echo(f"{indent}  Observation: {_preview(step.observation)}")


def _echo_pipeline_step(index: int, step: PipelineStep) -> None:
    click.echo(f"[Node {index}] {step.agent_name or step.agent_id} ({step.node_id})")
    for step_index, react_step in enumerate(step.react_steps, start=1):
        _echo_react_step(step_index, react_step, indent="  ")
    click.echo(f"  Output: {_preview(step.output)}")


async def _follow_run(orchestrator: Orchestrator, item_id: str) -> ExecutionState:
    """Print steps as they are recorded until the run finishes."""
    shown = 0
    while True:
        state = orchestrator.get_execution_state(item_id)
        steps = state.pipeline_steps if state.kind == ExecutionKind.PIPELINE else state.react_steps
        for index, step in enumerate(steps[shown:], start=shown + 1):
            if isinstance(step, PipelineStep):
                _echo_pipeline_step(index, step)
            else:
                _echo_react_step(index, step)
        shown = len(steps)

        if not state.is_running:
            return state
        await asyncio.sleep(POLL_INTERVAL_SECONDS)


def _report(ctx: click.Context, state: ExecutionState) -> None:
    """Print the outcome of a run and exit non-zero unless it succeeded."""
    if state.status == ExecutionStatus.SUCCESS:
        click.echo(f"\nFinal Answer: {state.output}")
        return

    click.echo(f"\nRun {state.status.value}: {state.error}", err=True)
    ctx.exit(1)


@main.command("run-agent")
@click.argument("agent_id")
@click.argument("input_text")
@click.pass_context
def run_agent(ctx: click.Context, agent_id: str, input_text: str) -> None:
    """Run an agent on INPUT_TEXT and stream its steps."""
    orchestrator = _load_orchestrator(ctx)

    async def execute() -> ExecutionState:
        orchestrator.start_agent_run(agent_id, input_text)
        try:
            return await _follow_run(orchestrator, agent_id)
        finally:
            await orchestrator.registry.shutdown()

    try:
        orchestrator.get_agent(agent_id)
    except AgentNotFoundError as e:
        raise click.ClickException(str(e))

    _report(ctx, asyncio.run(execute()))


@main.command("run-pipeline")
@click.argument("pipeline_id")
@click.argument("input_text")
@click.pass_context
def run_pipeline(ctx: click.Context, pipeline_id: str, input_text: str) -> None:
    """Run a pipeline on INPUT_TEXT and stream its node results."""
    orchestrator = _load_orchestrator(ctx)

    async def execute() -> ExecutionState:
        orchestrator.start_pipeline_run(pipeline_id, input_text)
        try:
            return await _follow_run(orchestrator, pipeline_id)
        finally:
            await orchestrator.registry.shutdown()

    try:
        orchestrator.get_pipeline(pipeline_id)
    except PipelineNotFoundError as e:
        raise click.ClickException(str(e))

    _report(ctx, asyncio.run(execute()))


@main.command("adk-config")
@click.argument("agent_id")
@click.pass_context
def adk_config(ctx: click.Context, agent_id: str) -> None:
    """Print an agent as an ADK style JSON config."""
    orchestrator = _load_orchestrator(ctx)
    try:
        agent = orchestrator.get_agent(agent_id)
    except AgentNotFoundError as e:
        raise click.ClickException(str(e))

    click.echo(json.dumps(agent.to_adk_config(), indent=2))


@main.command()
@click.option("--output", "-o", "output_path", type=click.Path(dir_okay=False), help="File to write instead of stdout")
@click.pass_context
def export(ctx: click.Context, output_path: Optional[str]) -> None:
    """Export the agent and pipeline catalog as an app config document."""
    orchestrator = _load_orchestrator(ctx)
    document = json.dumps(dump_catalog(orchestrator.list_agents(), orchestrator.list_pipelines()), indent=2)

    if output_path:
        Path(output_path).write_text(document + "\n", encoding="utf-8")
        click.echo(f"Exported {len(orchestrator.list_agents())} agents and {len(orchestrator.list_pipelines())} pipelines to {output_path}")
    else:
        click.echo(document)


if __name__ == "__main__":
    main()
