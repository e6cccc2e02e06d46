"""Tests for the patch-based tree assembler."""

import logging

import pytest

from recursive_agent.engine.tree_assembler import TreeAssembler
from recursive_agent.exceptions import InvalidStateTransition, SnapshotPatchError
from recursive_agent.models.work_unit_models import WorkUnit, WorkUnitState


class TestTreeAssembler:
    """Test patch application and snapshots."""

    def setup_method(self):
        self.assembler = TreeAssembler()
        self.root = WorkUnit(task="root")

    def test_first_patch_sets_root(self):
        snapshot = self.assembler.apply((), self.root)

        assert snapshot.id == self.root.id
        assert snapshot is not self.root
        assert self.assembler.patch_count == 1

    def test_root_patch_merges_fields_only(self):
        self.assembler.apply((), self.root)
        child = WorkUnit(task="child", depth=1)
        self.assembler.apply((0,), child)

        # The orchestrator's own root has no children yet; the assembled one keeps its own
        self.root.result = "partial"
        snapshot = self.assembler.apply((), self.root)

        assert snapshot.result == "partial"
        assert [c.id for c in snapshot.children] == [child.id]

    def test_child_append_and_merge(self):
        self.assembler.apply((), self.root)
        child = WorkUnit(task="child", depth=1)
        self.assembler.apply((0,), child)

        child.result = "finished"
        child.advance_state(WorkUnitState.DONE)
        snapshot = self.assembler.apply((0,), child)

        assert snapshot.children[0].state == WorkUnitState.DONE
        assert snapshot.children[0].result == "finished"

    def test_nested_path(self):
        self.assembler.apply((), self.root)
        self.assembler.apply((0,), WorkUnit(task="a", depth=1))
        self.assembler.apply((1,), WorkUnit(task="b", depth=1))
        grandchild = WorkUnit(task="b.a", depth=2)

        snapshot = self.assembler.apply((1, 0), grandchild)

        assert [c.task for c in snapshot.children] == ["a", "b"]
        assert snapshot.children[1].children[0].id == grandchild.id

    def test_patch_does_not_carry_subtree(self):
        self.assembler.apply((), self.root)
        child = WorkUnit(task="child", depth=1)
        child.children.append(WorkUnit(task="smuggled", depth=2))

        snapshot = self.assembler.apply((0,), child)

        assert snapshot.children[0].children == []

    def test_snapshots_are_independent(self):
        first = self.assembler.apply((), self.root)
        self.assembler.apply((0,), WorkUnit(task="child", depth=1))

        assert first.children == []

    def test_skipping_an_index_is_rejected(self):
        self.assembler.apply((), self.root)

        with pytest.raises(SnapshotPatchError):
            self.assembler.apply((1,), WorkUnit(task="late", depth=1))

    def test_child_before_root_is_rejected(self):
        with pytest.raises(SnapshotPatchError):
            self.assembler.apply((0,), WorkUnit(task="orphan", depth=1))

    def test_missing_parent_is_rejected(self):
        self.assembler.apply((), self.root)

        with pytest.raises(SnapshotPatchError):
            self.assembler.apply((0, 0), WorkUnit(task="orphan", depth=2))

    def test_id_mismatch_is_rejected(self):
        self.assembler.apply((), self.root)
        self.assembler.apply((0,), WorkUnit(task="a", depth=1))

        with pytest.raises(SnapshotPatchError):
            self.assembler.apply((0,), WorkUnit(task="impostor", depth=1))

    def test_backward_state_is_rejected(self):
        done = WorkUnit(task="root", state=WorkUnitState.DONE)
        self.assembler.apply((), done)

        regressed = done.model_copy(update={"state": WorkUnitState.THINKING})
        with pytest.raises(InvalidStateTransition):
            self.assembler.apply((), regressed)

    def test_rejected_patch_is_logged(self, caplog):
        self.assembler.apply((), self.root)

        with caplog.at_level(logging.ERROR, logger="recursive_agent.engine.tree_assembler"):
            with pytest.raises(SnapshotPatchError):
                self.assembler.apply((2,), WorkUnit(task="late", depth=1))

        assert "Rejected patch #2 at (2,)" in caplog.text
        assert self.assembler.patch_count == 1

    def test_snapshot_before_any_patch(self):
        with pytest.raises(SnapshotPatchError):
            self.assembler.snapshot()
