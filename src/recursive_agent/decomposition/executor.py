"""Simulated work executor producing a result string per task."""

import asyncio
import logging
import random
from typing import Awaitable, Callable, Optional, Sequence, Tuple

from .rules import CategoryRule, match_first
from ..exceptions import ExecutionFault

logger = logging.getLogger(__name__)

Waiter = Callable[[float], Awaitable[None]]


COMPLETION_RULES: Tuple[CategoryRule[str], ...] = (
    CategoryRule(
        name="travel",
        keywords=("plan", "trip"),
        payload=(
            "Analyzed travel requirements. Key considerations: budget, duration, "
            "season, interests. Ready to delegate specific aspects."
        ),
    ),
    CategoryRule(
        name="flight",
        keywords=("flight",),
        payload=(
            "Found optimal flight options considering price, duration, and "
            "convenience. Recommendations prepared."
        ),
    ),
    CategoryRule(
        name="hotel",
        keywords=("hotel", "accommodation"),
        payload=(
            "Evaluated accommodations based on location, ratings, and amenities. "
            "Top choices identified."
        ),
    ),
    CategoryRule(
        name="activities",
        keywords=("activit", "itinerary"),
        payload="Curated activities matching interests and schedule. Daily itinerary optimized.",
    ),
    CategoryRule(
        name="research",
        keywords=("research",),
        payload="Completed research gathering. Data compiled and analyzed for decision making.",
    ),
    CategoryRule(
        name="analysis",
        keywords=("analyze", "evaluat"),
        payload="Analysis complete. Patterns identified and insights extracted from available data.",
    ),
    CategoryRule(
        name="writing",
        keywords=("write", "create"),
        payload="Content generated following best practices. Structure and flow optimized.",
    ),
    CategoryRule(
        name="calculation",
        keywords=("calculate", "compute"),
        payload="Calculations completed. Results verified and formatted for presentation.",
    ),
    CategoryRule(
        name="generic",
        keywords=(),
        payload="Task processed successfully. Requirements analyzed and solution prepared.",
    ),
)


class WorkExecutor:
    """
    Simulates processing one task into a result string.

    PATTERN: Wait for a variable latency, then look up a canned completion
    CRITICAL: The wait is the only suspension point of a run
    GOTCHA: Any fault is re-raised as ExecutionFault for the orchestrator
    """

    def __init__(
        self,
        min_latency: float = 0.8,
        max_latency: float = 1.5,
        waiter: Optional[Waiter] = None,
        rng: Optional[random.Random] = None,
        rules: Optional[Sequence[CategoryRule[str]]] = None,
    ):
        """
        Initialize work executor.

        Args:
            min_latency: Lower bound of simulated latency (seconds)
            max_latency: Upper bound of simulated latency (seconds)
            waiter: Async callable performing the wait (default asyncio.sleep)
            rng: Random source for latency jitter
            rules: Completion phrase table (defaults to COMPLETION_RULES)
        """
        if max_latency < min_latency:
            raise ValueError("max_latency must be >= min_latency")

        self.min_latency = min_latency
        self.max_latency = max_latency
        self.waiter = waiter or asyncio.sleep
        self.rng = rng or random.Random()
        self.rules = tuple(rules) if rules is not None else COMPLETION_RULES
        self.logger = logging.getLogger(__name__)

    def next_delay(self) -> float:
        """Draw the simulated latency for the next task."""
        if self.max_latency == self.min_latency:
            return self.min_latency
        return self.rng.uniform(self.min_latency, self.max_latency)

    async def process(self, task: str, depth: int) -> str:
        """
        Process a task and return its result.

        Args:
            task: Task description
            depth: Depth of the owning unit

        Returns:
            Result text

        Raises:
            ExecutionFault: If waiting or computing the result fails
        """
        delay = self.next_delay()

        try:
            await self.waiter(delay)
            rule = match_first(task, self.rules)
        except Exception as e:
            self.logger.error(f"Execution failed for '{task[:50]}' at depth {depth}: {e}")
            raise ExecutionFault(f"Processing failed for task '{task}': {e}") from e

        self.logger.debug(
            f"Processed '{task[:50]}' at depth {depth} in {delay:.2f}s "
            f"(category: {rule.name})"
        )
        return rule.payload
