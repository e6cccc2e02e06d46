"""Deterministic task splitter backed by a category template table."""

import logging
from typing import List, Optional, Sequence, Tuple

from .rules import CategoryRule, match_first

logger = logging.getLogger(__name__)


SUBTASK_RULES: Tuple[CategoryRule[Tuple[str, ...]], ...] = (
    CategoryRule(
        name="trip",
        keywords=("trip", "travel"),
        payload=(
            "Research and book flights",
            "Find and reserve accommodation",
            "Plan daily activities and itinerary",
            "Calculate total budget and costs",
        ),
    ),
    CategoryRule(
        name="flight",
        keywords=("flight",),
        payload=(
            "Compare airline prices and schedules",
            "Evaluate flight duration and layovers",
            "Check baggage policies and fees",
        ),
    ),
    CategoryRule(
        name="hotel",
        keywords=("hotel", "accommodation"),
        payload=(
            "Search hotels by location and ratings",
            "Compare prices and amenities",
            "Check availability and cancellation policies",
        ),
    ),
    CategoryRule(
        name="activities",
        keywords=("activit", "itinerary"),
        payload=(
            "Research popular attractions and landmarks",
            "Find local restaurants and dining options",
            "Plan transportation between locations",
        ),
    ),
    CategoryRule(
        name="plan",
        keywords=("plan", "organize"),
        payload=(
            "Define objectives and requirements",
            "Research relevant information",
            "Evaluate options and alternatives",
            "Create timeline and action items",
        ),
    ),
    CategoryRule(
        name="generic",
        keywords=(),
        payload=(
            "Gather necessary information",
            "Analyze requirements",
            "Generate solution",
        ),
    ),
)


class TaskSplitter:
    """
    Maps a task description to an ordered list of sub-task descriptions.

    PATTERN: First matching category wins, generic fallback last
    GOTCHA: Same input must always produce the same list
    """

    def __init__(self, rules: Optional[Sequence[CategoryRule[Tuple[str, ...]]]] = None):
        self.rules = tuple(rules) if rules is not None else SUBTASK_RULES
        self.logger = logging.getLogger(__name__)

    def decompose(self, task: str) -> List[str]:
        """
        Split a task into sub-task descriptions.

        Args:
            task: Task description

        Returns:
            Non-empty list of sub-task descriptions in execution order
        """
        rule = match_first(task, self.rules)
        subtasks = list(rule.payload)

        if not subtasks:
            raise ValueError(f"Category '{rule.name}' has no sub-task template")

        self.logger.debug(
            f"Split '{task[:50]}' into {len(subtasks)} subtasks (category: {rule.name})"
        )
        return subtasks
