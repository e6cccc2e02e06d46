"""Rich rendering of work trees for the CLI."""

import logging
from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from ...models.work_unit_models import WorkUnit, WorkUnitState

logger = logging.getLogger(__name__)

STATUS_STYLES = {
    WorkUnitState.PENDING: ("⏸", "dim"),
    WorkUnitState.THINKING: ("⏳", "yellow"),
    WorkUnitState.DONE: ("✓", "green"),
    WorkUnitState.FAILED: ("✗", "bold red"),
}


class TreeRenderer:
    """
    Renders a WorkUnit tree with status icons, depth and timestamps.

    Later snapshots of the same unit simply replace earlier ones, since
    every render starts from a full root snapshot.
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        show_results: bool = True,
    ):
        """
        Initialize tree renderer.

        Args:
            console: Rich console (creates new if not provided)
            show_results: Include each unit's result under its task line
        """
        self.console = console or Console()
        self.show_results = show_results

    def build(self, root: WorkUnit) -> Tree:
        """Build a rich Tree for ``root``."""
        tree = Tree(self._label(root), guide_style="dim")
        self._add_children(tree, root)
        return tree

    def _add_children(self, branch: Tree, unit: WorkUnit) -> None:
        for child in unit.children:
            sub = branch.add(self._label(child))
            self._add_children(sub, child)

    def _label(self, unit: WorkUnit) -> Text:
        icon, style = STATUS_STYLES.get(unit.state, ("?", "white"))

        label = Text()
        label.append(f"{icon} ", style=style)
        label.append(unit.task, style="bold")
        label.append(
            f"  depth {unit.depth} · {unit.created_at.strftime('%H:%M:%S')}",
            style="dim",
        )

        if self.show_results and unit.result:
            label.append("\n")
            label.append(unit.result, style="red" if unit.state == WorkUnitState.FAILED else "")

        return label

    def render(self, root: WorkUnit) -> None:
        """Print the tree once."""
        self.console.print(self.build(root))

    def render_summary(self, summary: dict, title: str = "Run summary") -> None:
        """
        Render a progress summary as a table.

        Args:
            summary: Output of summarize_tree()
            title: Table title
        """
        table = Table(title=title, show_header=True)
        table.add_column("Metric")
        table.add_column("Value", justify="right")

        for key, value in summary.items():
            if isinstance(value, dict):
                value = ", ".join(f"{k}: {v}" for k, v in sorted(value.items()))
            table.add_row(key.replace("_", " ").title(), str(value))

        self.console.print(table)
