"""Recursive task decomposition engine with live tree streaming."""

from .engine import RecursiveOrchestrator, CancellationToken
from .decomposition import TaskClassifier, KeywordTaskClassifier
from .models import WorkUnit, WorkUnitState, TreeSnapshot, RunRequest

__version__ = "0.1.0"

__all__ = [
    "RecursiveOrchestrator",
    "CancellationToken",
    "TaskClassifier",
    "KeywordTaskClassifier",
    "WorkUnit",
    "WorkUnitState",
    "TreeSnapshot",
    "RunRequest",
]
