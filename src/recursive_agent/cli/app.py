"""Main CLI application entry point."""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from dotenv import load_dotenv

# Load .env file from project root or current directory
_env_paths = [
    Path(__file__).parent.parent.parent.parent / ".env",  # Project root
    Path.cwd() / ".env",  # Current working directory
]
for env_path in _env_paths:
    if env_path.exists():
        load_dotenv(env_path)
        break

from ..config.engine_config import EngineConfig, load_config
from ..engine.orchestrator import RecursiveOrchestrator
from ..engine.progress import summarize_tree
from ..models.work_unit_models import WorkUnit, WorkUnitState
from ..streaming.sse import format_sse_event, stream_snapshots
from .output.live import LiveTreeSink
from .output.renderer import TreeRenderer

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool, level_name: str = "WARNING") -> None:
    """Configure root logging for CLI use."""
    log_level = logging.DEBUG if verbose else getattr(logging, level_name.upper(), logging.WARNING)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # Suppress noisy loggers in non-verbose mode
    if not verbose:
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
        logging.getLogger("recursive_agent.decomposition").setLevel(logging.WARNING)


@click.group()
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose logging",
)
@click.option(
    "--config", "config_path",
    type=click.Path(),
    help="Config file path",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, config_path: Optional[str]) -> None:
    """
    Recursive Agent - expand a task into a live tree of sub-tasks.

    Run a task in the terminal:
        recursive-agent run "Plan a trip to Japan"

    Stream snapshots as server-sent events:
        recursive-agent run --json "Plan a trip to Japan"

    Serve the HTTP API:
        recursive-agent serve --port 8000
    """
    try:
        config = load_config(config_path)
    except ValueError as e:
        raise click.ClickException(f"Invalid configuration: {e}")

    configure_logging(verbose, config.log_level)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["verbose"] = verbose


@main.command()
@click.argument("task")
@click.option(
    "--max-depth", "-d",
    type=click.IntRange(min=0),
    default=None,
    help="Maximum recursion depth (default from config)",
)
@click.option(
    "--fast",
    is_flag=True,
    help="Skip the simulated thinking delay",
)
@click.option(
    "--json", "json_output",
    is_flag=True,
    help="Print SSE-framed snapshots instead of the live tree",
)
@click.pass_context
def run(
    ctx: click.Context,
    task: str,
    max_depth: Optional[int],
    fast: bool,
    json_output: bool,
) -> None:
    """Execute TASK and show the tree as it grows."""
    config: EngineConfig = ctx.obj["config"]

    if max_depth is not None and max_depth > config.max_depth_limit:
        raise click.BadParameter(
            f"must be <= {config.max_depth_limit}", param_hint="--max-depth"
        )

    if fast:
        config = config.model_copy(
            update={"min_latency_seconds": 0.0, "max_latency_seconds": 0.0}
        )

    try:
        root = asyncio.run(run_task(config, task, max_depth, json_output))
    except KeyboardInterrupt:
        click.echo("Interrupted", err=True)
        sys.exit(130)

    if root is None or root.state == WorkUnitState.FAILED:
        sys.exit(1)


async def run_task(
    config: EngineConfig,
    task: str,
    max_depth: Optional[int],
    json_output: bool,
) -> Optional[WorkUnit]:
    """
    Async runner for the run command.

    Args:
        config: Engine configuration
        task: Task description
        max_depth: Recursion ceiling (config default if None)
        json_output: Emit SSE lines instead of a live tree

    Returns:
        Settled root unit
    """
    orchestrator = RecursiveOrchestrator(config=config)

    if json_output:
        root: Optional[WorkUnit] = None
        async for snapshot in stream_snapshots(orchestrator, task, max_depth):
            click.echo(format_sse_event(snapshot), nl=False)
            root = snapshot.tree
        return root

    renderer = TreeRenderer()
    async with LiveTreeSink(renderer) as sink:
        root = await orchestrator.run(task, max_depth=max_depth, on_update=sink)

    renderer.render_summary(summarize_tree(root))
    return root


@main.command()
@click.option("--host", default=None, help="Bind address (default from config)")
@click.option("--port", type=int, default=None, help="Bind port (default from config)")
@click.pass_context
def serve(ctx: click.Context, host: Optional[str], port: Optional[int]) -> None:
    """Serve the streaming HTTP API."""
    from ..server import serve as serve_app

    config: EngineConfig = ctx.obj["config"]
    overrides = {k: v for k, v in (("host", host), ("port", port)) if v is not None}
    if overrides:
        config = config.model_copy(update=overrides)

    click.echo(f"Serving on http://{config.host}:{config.port}")
    serve_app(config)
