"""Authoritative run tree assembled from (path, unit) patches."""

import logging
from typing import Optional, Tuple

from ..exceptions import SnapshotPatchError
from ..models.work_unit_models import WorkUnit

logger = logging.getLogger(__name__)

UnitPath = Tuple[int, ...]


class TreeAssembler:
    """
    Owns the streamed copy of a run's tree.

    Every emission from the orchestrator arrives as a patch ``(path, unit)``
    where ``path`` is the chain of child indices from the root. Only the
    unit's own fields are taken from a patch; its children are built from
    their own patches, so a patch never has to carry a subtree.

    PATTERN: Single consumer applies patches in emission order
    CRITICAL: State may only move forward, ids at a position never change
    """

    def __init__(self):
        self.root: Optional[WorkUnit] = None
        self.patch_count = 0
        self.logger = logging.getLogger(__name__)

    def apply(self, path: UnitPath, unit: WorkUnit) -> WorkUnit:
        """
        Apply a patch and return a deep snapshot of the root.

        Args:
            path: Child indices from the root to the patched unit
            unit: Current state of the unit

        Returns:
            Deep copy of the assembled root

        Raises:
            SnapshotPatchError: If the path or id does not line up with the tree
        """
        try:
            if not path:
                if self.root is None:
                    self.root = self._detach(unit)
                else:
                    self._merge(self.root, unit)
            else:
                parent = self._node_at(path[:-1])
                index = path[-1]

                if index < len(parent.children):
                    self._merge(parent.children[index], unit)
                elif index == len(parent.children):
                    parent.children.append(self._detach(unit))
                else:
                    raise SnapshotPatchError(
                        f"Patch index {index} skips ahead of {len(parent.children)} children "
                        f"at path {path[:-1]}"
                    )
        except SnapshotPatchError as e:
            self.logger.error(f"Rejected patch #{self.patch_count + 1} at {path}: {e}")
            raise

        self.patch_count += 1
        return self.snapshot()

    def snapshot(self) -> WorkUnit:
        """Deep copy of the current root."""
        if self.root is None:
            raise SnapshotPatchError("No root unit has been emitted yet")
        return self.root.snapshot()

    def _node_at(self, path: UnitPath) -> WorkUnit:
        if self.root is None:
            raise SnapshotPatchError(f"Patch at {path} arrived before the root")

        node = self.root
        for depth, index in enumerate(path):
            if index >= len(node.children):
                raise SnapshotPatchError(f"No unit at path {path[: depth + 1]}")
            node = node.children[index]
        return node

    @staticmethod
    def _detach(unit: WorkUnit) -> WorkUnit:
        return unit.model_copy(update={"children": []})

    @staticmethod
    def _merge(target: WorkUnit, unit: WorkUnit) -> None:
        if target.id != unit.id:
            raise SnapshotPatchError(
                f"Patch for unit {unit.id} landed on position held by {target.id}"
            )

        target.advance_state(unit.state)
        target.result = unit.result
