"""Tests for SSE framing and the run-to-stream bridge."""

import asyncio
import json

import pytest

from recursive_agent.engine.progress import iter_units
from recursive_agent.models.work_unit_models import TreeSnapshot, WorkUnit, WorkUnitState
from recursive_agent.streaming.sse import format_sse_event, sse_event_stream, stream_snapshots


def test_format_sse_event():
    snapshot = TreeSnapshot(tree=WorkUnit(task="Say hello"))

    event = format_sse_event(snapshot)

    assert event.startswith("data: ")
    assert event.endswith("\n\n")
    payload = json.loads(event[len("data: "):])
    assert payload["tree"]["task"] == "Say hello"
    assert payload["tree"]["state"] == "thinking"
    assert "createdAt" in payload["tree"]


@pytest.mark.asyncio
async def test_stream_snapshots_runs_to_completion(orchestrator):
    snapshots = [s async for s in stream_snapshots(orchestrator, "Plan a trip to Japan", 1)]

    assert len(snapshots) == 15
    assert snapshots[0].tree.state == WorkUnitState.THINKING
    final = snapshots[-1].tree
    assert final.state == WorkUnitState.DONE
    assert len(final.children) == 4
    assert all(u.is_terminal for u in iter_units(final))


@pytest.mark.asyncio
async def test_stream_ends_after_failed_root(faulty_orchestrator):
    orchestrator = faulty_orchestrator("Say hello")

    snapshots = [s async for s in stream_snapshots(orchestrator, "Say hello")]

    assert [s.tree.state for s in snapshots] == [
        WorkUnitState.THINKING,
        WorkUnitState.FAILED,
    ]


@pytest.mark.asyncio
async def test_closing_stream_early_cancels_run(faulty_orchestrator):
    orchestrator = faulty_orchestrator()
    stream = stream_snapshots(orchestrator, "Plan a trip to Japan", 2)

    received = []
    async for snapshot in stream:
        received.append(snapshot)
        if len(received) == 2:
            break
    await stream.aclose()

    # The background run is settled before aclose returns
    pending = [
        t for t in asyncio.all_tasks() if "run_and_close" in t.get_coro().__qualname__
    ]
    assert pending == []

    executed = len(orchestrator.classifier.executed)
    await asyncio.sleep(0.05)

    assert len(orchestrator.classifier.executed) == executed
    # The full run would execute 11 units
    assert executed < 11


@pytest.mark.asyncio
async def test_sse_event_stream_frames_every_snapshot(orchestrator):
    events = [e async for e in sse_event_stream(orchestrator, "Say hello")]

    assert len(events) == 3
    final = json.loads(events[-1][len("data: "):])
    assert final["tree"]["state"] == "done"
