"""Shared fixtures for recursive agent tests."""

from typing import Iterable, List

import pytest

from recursive_agent.config.engine_config import EngineConfig
from recursive_agent.decomposition.executor import WorkExecutor
from recursive_agent.decomposition.keyword_classifier import KeywordTaskClassifier
from recursive_agent.engine.orchestrator import RecursiveOrchestrator


class FaultyClassifier(KeywordTaskClassifier):
    """Keyword classifier whose executor fails for selected tasks."""

    def __init__(self, failing_tasks: Iterable[str]):
        super().__init__(executor=WorkExecutor(min_latency=0.0, max_latency=0.0))
        self.failing_tasks = set(failing_tasks)
        self.executed: List[str] = []

    async def execute(self, task: str, depth: int) -> str:
        self.executed.append(task)
        if task in self.failing_tasks:
            raise RuntimeError(f"simulated outage for '{task}'")
        return await super().execute(task, depth)


@pytest.fixture
def fast_config() -> EngineConfig:
    """Config with no simulated latency."""
    return EngineConfig(min_latency_seconds=0.0, max_latency_seconds=0.0)


@pytest.fixture
def orchestrator(fast_config) -> RecursiveOrchestrator:
    """Orchestrator using the keyword classifier with no latency."""
    return RecursiveOrchestrator(config=fast_config)


@pytest.fixture
def faulty_orchestrator(fast_config):
    """Factory building an orchestrator whose executor fails for given tasks."""

    def build(*failing_tasks: str) -> RecursiveOrchestrator:
        return RecursiveOrchestrator(
            classifier=FaultyClassifier(failing_tasks),
            config=fast_config,
        )

    return build
