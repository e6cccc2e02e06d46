"""Keyword-table implementation of the task classifier."""

import logging
from typing import List, Optional

from .base import TaskClassifier
from .executor import WorkExecutor
from .policy import DecompositionPolicy
from .splitter import TaskSplitter
from ..config.engine_config import EngineConfig


logger = logging.getLogger(__name__)


class KeywordTaskClassifier(TaskClassifier):
    """Composes the keyword policy, splitter and simulated executor."""

    def __init__(
        self,
        policy: Optional[DecompositionPolicy] = None,
        splitter: Optional[TaskSplitter] = None,
        executor: Optional[WorkExecutor] = None,
    ):
        super().__init__(name="keyword")
        self.policy = policy or DecompositionPolicy()
        self.splitter = splitter or TaskSplitter()
        self.executor = executor or WorkExecutor()

    @classmethod
    def from_config(cls, config: EngineConfig) -> "KeywordTaskClassifier":
        """Build a classifier whose executor latency follows ``config``."""
        return cls(
            executor=WorkExecutor(
                min_latency=config.min_latency_seconds,
                max_latency=config.max_latency_seconds,
            )
        )

    def should_split(self, task: str, depth: int, max_depth: int) -> bool:
        return self.policy.should_decompose(task, depth, max_depth)

    def split(self, task: str) -> List[str]:
        return self.splitter.decompose(task)

    async def execute(self, task: str, depth: int) -> str:
        return await self.executor.process(task, depth)
