"""Decomposition policy deciding whether a task is split further."""

import logging
from typing import Iterable, Optional

logger = logging.getLogger(__name__)

COMPLEXITY_KEYWORDS = (
    "plan",
    "create",
    "develop",
    "design",
    "build",
    "analyze",
    "research",
    "compare",
    "evaluate",
    "organize",
    "trip",
)


class DecompositionPolicy:
    """
    Keyword-driven complexity check with a hard depth ceiling.

    PATTERN: Depth limit first, then keyword match
    CRITICAL: The depth ceiling is the only guard against unbounded recursion
    """

    def __init__(self, keywords: Optional[Iterable[str]] = None):
        """
        Initialize policy.

        Args:
            keywords: Complexity keywords (defaults to COMPLEXITY_KEYWORDS)
        """
        self.keywords = tuple(
            k.lower() for k in (keywords if keywords is not None else COMPLEXITY_KEYWORDS)
        )
        self.logger = logging.getLogger(__name__)

    def should_decompose(self, task: str, depth: int, max_depth: int) -> bool:
        """
        Determine if a task should be split into sub-tasks.

        Args:
            task: Task description
            depth: Current depth in tree
            max_depth: Maximum depth at which splitting is still allowed

        Returns:
            True if the task should be decomposed
        """
        if depth >= max_depth:
            self.logger.debug(f"Depth {depth} reached ceiling {max_depth}, not splitting")
            return False

        task_lower = task.lower()
        return any(keyword in task_lower for keyword in self.keywords)
