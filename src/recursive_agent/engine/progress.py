"""Tree walking, progress summaries and text visualization."""

import logging
from datetime import datetime
from typing import Dict, Iterator, Optional

from ..models.work_unit_models import WorkUnit, WorkUnitState


logger = logging.getLogger(__name__)

STATUS_ICONS = {
    WorkUnitState.PENDING: "⏸",
    WorkUnitState.THINKING: "…",
    WorkUnitState.DONE: "✓",
    WorkUnitState.FAILED: "✗",
}


def iter_units(root: WorkUnit) -> Iterator[WorkUnit]:
    """Depth-first, pre-order walk over a tree."""
    yield root
    for child in root.children:
        yield from iter_units(child)


def summarize_tree(root: WorkUnit, now: Optional[datetime] = None) -> dict:
    """
    Get progress summary for a tree.

    PATTERN: Aggregate statistics for reporting
    GOTCHA: Elapsed time is measured from the root's creation

    Args:
        root: Root unit
        now: Reference time (defaults to datetime.now())

    Returns:
        Dictionary with progress statistics
    """
    status_counts: Dict[str, int] = {}
    total = 0
    leaves = 0
    deepest = root.depth

    for unit in iter_units(root):
        total += 1
        if unit.is_leaf:
            leaves += 1
        deepest = max(deepest, unit.depth)
        status_counts[unit.state.value] = status_counts.get(unit.state.value, 0) + 1

    elapsed = ((now or datetime.now()) - root.created_at).total_seconds()

    return {
        "total_units": total,
        "leaf_units": leaves,
        "max_depth": deepest,
        "status_distribution": status_counts,
        "done_units": status_counts.get(WorkUnitState.DONE.value, 0),
        "failed_units": status_counts.get(WorkUnitState.FAILED.value, 0),
        "elapsed_seconds": round(max(elapsed, 0.0), 3),
    }


def render_tree_text(root: WorkUnit, max_depth: Optional[int] = None) -> str:
    """
    Generate ASCII visualization of a tree.

    Args:
        root: Root unit
        max_depth: Deepest level to include (all levels if None)

    Returns:
        String visualization
    """
    lines = []

    def visualize_unit(unit: WorkUnit, prefix: str, child_prefix: str) -> None:
        if max_depth is not None and unit.depth > max_depth:
            return

        icon = STATUS_ICONS.get(unit.state, "?")
        lines.append(f"{prefix}{icon} {unit.task} [{unit.state.value}]")

        for i, child in enumerate(unit.children):
            is_last = i == len(unit.children) - 1
            visualize_unit(
                child,
                child_prefix + ("└─ " if is_last else "├─ "),
                child_prefix + ("   " if is_last else "│  "),
            )

    visualize_unit(root, "", "")
    return "\n".join(lines)
