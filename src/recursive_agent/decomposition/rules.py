"""Keyword category rules shared by the splitter and executor tables."""

from dataclasses import dataclass
from typing import Generic, Sequence, Tuple, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class CategoryRule(Generic[T]):
    """
    Maps a set of keywords to a payload.

    A rule with no keywords matches every task and is used as the fallback.
    """

    name: str
    keywords: Tuple[str, ...]
    payload: T

    def matches(self, task_lower: str) -> bool:
        if not self.keywords:
            return True
        return any(keyword in task_lower for keyword in self.keywords)


def match_first(task: str, rules: Sequence[CategoryRule[T]]) -> CategoryRule[T]:
    """
    Return the first rule matching ``task`` (case-insensitive).

    Args:
        task: Task description
        rules: Rules in priority order; the last one should be a fallback

    Returns:
        Matching rule

    Raises:
        LookupError: If no rule matches and the table has no fallback
    """
    task_lower = task.lower()

    for rule in rules:
        if rule.matches(task_lower):
            return rule

    raise LookupError(f"No category rule matches task: {task!r}")
