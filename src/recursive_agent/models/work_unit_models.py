"""Data models for the recursive work tree."""

from pydantic import BaseModel, Field
from typing import List
from enum import Enum
from datetime import datetime
from uuid import uuid4

from ..exceptions import InvalidStateTransition


class WorkUnitState(str, Enum):
    """Lifecycle state of a work unit."""

    PENDING = "pending"
    THINKING = "thinking"
    DONE = "done"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (WorkUnitState.DONE, WorkUnitState.FAILED)


# Allowed forward moves; terminal states have none.
_TRANSITIONS = {
    WorkUnitState.PENDING: {WorkUnitState.THINKING, WorkUnitState.FAILED},
    WorkUnitState.THINKING: {WorkUnitState.DONE, WorkUnitState.FAILED},
    WorkUnitState.DONE: set(),
    WorkUnitState.FAILED: set(),
}


class WorkUnit(BaseModel):
    """One node of the execution tree."""

    id: str = Field(default_factory=lambda: str(uuid4()), description="Unique unit ID")
    depth: int = Field(default=0, ge=0, description="Distance from the root")
    task: str = Field(description="Task description being processed")
    result: str = Field(default="", description="Outcome text")
    state: WorkUnitState = Field(default=WorkUnitState.THINKING)
    children: List["WorkUnit"] = Field(
        default_factory=list, description="Sub-task units in issue order"
    )
    created_at: datetime = Field(default_factory=datetime.now, alias="createdAt")

    class Config:
        """Pydantic configuration."""

        populate_by_name = True

    @property
    def is_terminal(self) -> bool:
        return self.state.is_terminal

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def can_transition_to(self, new_state: WorkUnitState) -> bool:
        """Check whether ``new_state`` is a legal next state (or the current one)."""
        return new_state == self.state or new_state in _TRANSITIONS[self.state]

    def advance_state(self, new_state: WorkUnitState) -> None:
        """
        Move the unit forward in its lifecycle.

        Args:
            new_state: Target state

        Raises:
            InvalidStateTransition: If the move would go backwards or leave a
                terminal state
        """
        if new_state == self.state:
            return

        if not self.can_transition_to(new_state):
            raise InvalidStateTransition(
                f"Unit {self.id} cannot move from {self.state.value} to {new_state.value}"
            )

        self.state = new_state

    def snapshot(self) -> "WorkUnit":
        """Return a deep copy safe to hand to a sink."""
        return self.model_copy(deep=True)


WorkUnit.model_rebuild()


class TreeSnapshot(BaseModel):
    """Self-describing streamed record carrying the full root tree."""

    tree: WorkUnit = Field(description="Current root of the execution tree")


class RunRequest(BaseModel):
    """Inbound request to execute a task."""

    task: str = Field(min_length=1, description="Task description")
    max_depth: int = Field(
        default=3,
        ge=0,
        alias="maxDepth",
        description="Maximum recursion depth (upper bound set by the server config)",
    )

    class Config:
        """Pydantic configuration."""

        populate_by_name = True
