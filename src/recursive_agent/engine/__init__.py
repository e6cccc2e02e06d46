"""Recursive execution engine.

The orchestrator expands a task into a tree of work units, executes them
sequentially and emits a full root snapshot after every mutation.
"""

from .cancellation import CancellationToken
from .orchestrator import RecursiveOrchestrator, UpdateCallback
from .progress import iter_units, summarize_tree, render_tree_text
from .tree_assembler import TreeAssembler, UnitPath

__all__ = [
    "CancellationToken",
    "RecursiveOrchestrator",
    "UpdateCallback",
    "iter_units",
    "summarize_tree",
    "render_tree_text",
    "TreeAssembler",
    "UnitPath",
]
