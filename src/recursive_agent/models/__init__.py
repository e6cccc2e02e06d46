"""Models package for the recursive agent engine."""

from .work_unit_models import (
    WorkUnitState,
    WorkUnit,
    TreeSnapshot,
    RunRequest,
)

__all__ = [
    "WorkUnitState",
    "WorkUnit",
    "TreeSnapshot",
    "RunRequest",
]
