"""Tests for the simulated work executor."""

import random
from unittest.mock import AsyncMock

import pytest

from recursive_agent.decomposition.executor import WorkExecutor
from recursive_agent.exceptions import ExecutionFault


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "task,expected_start",
    [
        ("Plan a trip to Japan", "Analyzed travel requirements"),
        ("Compare airline prices and flight schedules", "Found optimal flight options"),
        ("Find and reserve accommodation", "Evaluated accommodations"),
        ("Curate activities", "Curated activities"),
        ("Research popular attractions", "Completed research gathering"),
        ("Evaluate options", "Analysis complete"),
        ("Write a poem", "Content generated"),
        ("Calculate total budget and costs", "Calculations completed"),
        ("Say hello", "Task processed successfully"),
    ],
)
async def test_completion_table(task, expected_start):
    """Test each category returns its canned completion."""
    executor = WorkExecutor(min_latency=0.0, max_latency=0.0)

    result = await executor.process(task, depth=0)

    assert result.startswith(expected_start)


@pytest.mark.asyncio
async def test_waits_for_drawn_latency():
    """Test the waiter receives a delay inside the configured range."""
    waiter = AsyncMock()
    executor = WorkExecutor(
        min_latency=0.8,
        max_latency=1.5,
        waiter=waiter,
        rng=random.Random(42),
    )

    await executor.process("Say hello", depth=1)

    waiter.assert_awaited_once()
    delay = waiter.await_args.args[0]
    assert 0.8 <= delay <= 1.5


@pytest.mark.asyncio
async def test_waiter_fault_becomes_execution_fault():
    """Test faults from the wait step are wrapped."""
    waiter = AsyncMock(side_effect=OSError("clock broke"))
    executor = WorkExecutor(min_latency=0.0, max_latency=0.0, waiter=waiter)

    with pytest.raises(ExecutionFault) as exc_info:
        await executor.process("Say hello", depth=0)

    assert "clock broke" in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, OSError)


def test_invalid_latency_range():
    """Test max latency below min latency is rejected."""
    with pytest.raises(ValueError):
        WorkExecutor(min_latency=2.0, max_latency=1.0)


def test_fixed_latency():
    """Test equal bounds give a fixed delay."""
    assert WorkExecutor(min_latency=0.3, max_latency=0.3).next_delay() == 0.3
