"""Server-sent event framing and the run-to-stream bridge."""

import asyncio
import contextlib
import logging
from typing import AsyncIterator, Optional

from .sinks import QueueSink
from ..engine.cancellation import CancellationToken
from ..engine.orchestrator import RecursiveOrchestrator
from ..models.work_unit_models import TreeSnapshot

logger = logging.getLogger(__name__)


def format_sse_event(snapshot: TreeSnapshot) -> str:
    """Frame one snapshot as an SSE ``data:`` event."""
    return f"data: {snapshot.model_dump_json(by_alias=True)}\n\n"


async def stream_snapshots(
    orchestrator: RecursiveOrchestrator,
    task: str,
    max_depth: Optional[int] = None,
) -> AsyncIterator[TreeSnapshot]:
    """
    Run a task and yield every snapshot as it is emitted.

    PATTERN: Run in a background task, drain a queue in the caller
    CRITICAL: Closing the iterator early cancels the run
    GOTCHA: The stream ends without a sentinel once the root is terminal

    Args:
        orchestrator: Orchestrator executing the run
        task: Task description
        max_depth: Recursion ceiling (orchestrator default if None)

    Yields:
        TreeSnapshot per mutation
    """
    sink = QueueSink()
    cancel_token = CancellationToken()

    async def run_and_close() -> None:
        try:
            await orchestrator.run(
                task,
                max_depth=max_depth,
                on_update=sink,
                cancel_token=cancel_token,
            )
        finally:
            await sink.close()

    run_task = asyncio.create_task(run_and_close())

    try:
        while True:
            snapshot = await sink.queue.get()
            if snapshot is None:
                break
            yield snapshot

        await run_task

    finally:
        if not run_task.done():
            logger.info(f"Stream consumer left before '{task[:50]}' finished, cancelling run")
            cancel_token.cancel("stream closed")
            run_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await run_task


async def sse_event_stream(
    orchestrator: RecursiveOrchestrator,
    task: str,
    max_depth: Optional[int] = None,
) -> AsyncIterator[str]:
    """Yield SSE-framed snapshots for a run."""
    async for snapshot in stream_snapshots(orchestrator, task, max_depth):
        yield format_sse_event(snapshot)
