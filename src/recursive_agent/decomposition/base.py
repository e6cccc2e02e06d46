"""Base task classifier abstract class for pluggable decomposition backends."""

import logging
from abc import ABC, abstractmethod
from typing import List


logger = logging.getLogger(__name__)


class TaskClassifier(ABC):
    """
    Abstract base class for task classification backends.

    The orchestrator only talks to this interface, so a model-backed
    implementation can replace the keyword tables without touching the
    recursion or streaming code.

    All classifiers must:
    - Implement should_split() as a pure, fast decision
    - Implement split() returning at least one sub-task, deterministically
    - Implement async execute() returning a non-empty result string
    """

    def __init__(self, name: str):
        """
        Initialize base classifier.

        Args:
            name: Classifier name used in logs
        """
        self.name = name
        self.logger = logging.getLogger(f"{__name__}.{name}")

    @abstractmethod
    def should_split(self, task: str, depth: int, max_depth: int) -> bool:
        """
        Decide whether a task is decomposed further.

        CRITICAL: Must return False once depth >= max_depth

        Args:
            task: Task description
            depth: Current depth in tree
            max_depth: Maximum allowed depth

        Returns:
            True if task should be decomposed
        """
        pass

    @abstractmethod
    def split(self, task: str) -> List[str]:
        """
        Split a task into ordered sub-task descriptions.

        CRITICAL: Only called after should_split() returned True

        Args:
            task: Task to split

        Returns:
            Non-empty list of sub-task descriptions
        """
        pass

    @abstractmethod
    async def execute(self, task: str, depth: int) -> str:
        """
        Process a task and return its result.

        Args:
            task: Task description
            depth: Depth of the owning unit

        Returns:
            Result text
        """
        pass
