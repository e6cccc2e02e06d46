"""Recursive orchestrator - drives task expansion and snapshot emission."""

import inspect
import logging
from datetime import datetime
from typing import Any, Awaitable, Callable, List, Optional, Union

from .cancellation import CancellationToken
from .tree_assembler import TreeAssembler, UnitPath
from ..config.engine_config import EngineConfig
from ..decomposition.base import TaskClassifier
from ..decomposition.keyword_classifier import KeywordTaskClassifier
from ..exceptions import ExecutionFault, SplitPolicyFault, TransportFault
from ..models.work_unit_models import WorkUnit, WorkUnitState


logger = logging.getLogger(__name__)

UpdateCallback = Callable[[WorkUnit], Union[None, Awaitable[None]]]


class _RunSession:
    """
    Per-run emission state.

    Holds the run's tree assembler and forwards each assembled root
    snapshot to the caller's callback.
    """

    def __init__(
        self,
        on_update: Optional[UpdateCallback],
        cancel_token: CancellationToken,
    ):
        self.on_update = on_update
        self.cancel_token = cancel_token
        self.assembler = TreeAssembler()
        self.emitting = on_update is not None
        self.units_created = 0
        self.logger = logging.getLogger(__name__)

    async def publish(self, path: UnitPath, unit: WorkUnit) -> None:
        if not self.emitting:
            return

        snapshot = self.assembler.apply(path, unit)

        try:
            outcome: Any = self.on_update(snapshot)
            if inspect.isawaitable(outcome):
                await outcome
        except TransportFault as e:
            self.logger.warning(f"Snapshot delivery failed, detaching sink: {e}")
            self._detach(f"transport fault: {e}")
        except Exception as e:
            self.logger.error(f"Update callback raised, detaching sink: {e}", exc_info=True)
            self._detach(f"update callback error: {e}")

    def _detach(self, reason: str) -> None:
        self.emitting = False
        self.cancel_token.cancel(reason)


class RecursiveOrchestrator:
    """
    Recursive task execution engine with live tree streaming.

    PATTERN: Execute -> decide -> split -> recurse sequentially -> aggregate
    CRITICAL: Faults are contained at the unit that raised them
    GOTCHA: Every mutation is emitted as a full root snapshot
    """

    def __init__(
        self,
        classifier: Optional[TaskClassifier] = None,
        config: Optional[EngineConfig] = None,
    ):
        """
        Initialize orchestrator.

        Args:
            classifier: Task classifier (keyword tables if None)
            config: Engine configuration (defaults if None)
        """
        self.config = config or EngineConfig()
        self.classifier = classifier or KeywordTaskClassifier.from_config(self.config)
        self.logger = logging.getLogger(__name__)

    async def run(
        self,
        task: str,
        depth: int = 0,
        max_depth: Optional[int] = None,
        on_update: Optional[UpdateCallback] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> WorkUnit:
        """
        Execute a task recursively and return its settled unit.

        Args:
            task: Task description
            depth: Depth of the unit created for ``task``
            max_depth: Recursion ceiling (config default if None)
            on_update: Callback receiving a root snapshot after every mutation;
                may be sync or async
            cancel_token: Optional token checked before each sub-task

        Returns:
            Root WorkUnit in a terminal state
        """
        if max_depth is None:
            max_depth = self.config.default_max_depth
        if depth < 0 or max_depth < 0:
            raise ValueError("depth and max_depth must be non-negative")

        session = _RunSession(on_update, cancel_token or CancellationToken())
        start_time = datetime.now()

        self.logger.info(f"Starting run: '{task[:50]}' (max_depth: {max_depth})")

        root = await self._execute(task, depth, max_depth, (), session)

        elapsed_ms = int((datetime.now() - start_time).total_seconds() * 1000)
        self.logger.info(
            f"Run complete: {root.state.value}, {session.units_created} units, "
            f"{session.assembler.patch_count} snapshots, time: {elapsed_ms}ms"
        )
        return root

    async def _execute(
        self,
        task: str,
        depth: int,
        max_depth: int,
        path: UnitPath,
        session: _RunSession,
    ) -> WorkUnit:
        """
        Run one node of the tree.

        Args:
            task: Task description
            depth: Current depth
            max_depth: Recursion ceiling
            path: Child indices from the root to this unit
            session: Run emission state

        Returns:
            The unit in a terminal state
        """
        unit = WorkUnit(depth=depth, task=task, state=WorkUnitState.THINKING)
        session.units_created += 1
        await session.publish(path, unit)

        try:
            result = await self.classifier.execute(task, depth)
            if not result or not result.strip():
                raise ExecutionFault(f"Executor returned an empty result for '{task}'")

            unit.result = result
            await session.publish(path, unit)

            if self._should_split(task, depth, max_depth):
                subtasks = self._split(task)
                self.logger.debug(
                    f"Decomposed '{task[:50]}' into {len(subtasks)} subtasks at depth {depth}"
                )

                for index, subtask in enumerate(subtasks):
                    if session.cancel_token.cancelled:
                        raise ExecutionFault(
                            f"Run cancelled after {index} of {len(subtasks)} subtasks"
                        )

                    child = await self._execute(
                        subtask, depth + 1, max_depth, path + (index,), session
                    )
                    self._attach_child(unit, child)

                unit.result = self._aggregate(result, unit.children)

            unit.advance_state(WorkUnitState.DONE)

        except SplitPolicyFault as e:
            self.logger.error(f"Classifier fault for unit {unit.id}: {e}", exc_info=True)
            self._fail(unit, e)
        except Exception as e:
            self.logger.warning(f"Unit {unit.id} failed at depth {depth}: {e}")
            self._fail(unit, e)

        await session.publish(path, unit)
        return unit

    def _should_split(self, task: str, depth: int, max_depth: int) -> bool:
        try:
            return self.classifier.should_split(task, depth, max_depth)
        except Exception as e:
            raise SplitPolicyFault(f"Decomposition policy failed: {e}") from e

    def _split(self, task: str) -> List[str]:
        try:
            subtasks = self.classifier.split(task)
        except Exception as e:
            raise SplitPolicyFault(f"Task splitter failed: {e}") from e

        if not subtasks:
            raise SplitPolicyFault(f"Task splitter returned no subtasks for '{task}'")
        return list(subtasks)

    @staticmethod
    def _attach_child(unit: WorkUnit, child: WorkUnit) -> None:
        """Replace the child with the same id in place, or append it."""
        for index, existing in enumerate(unit.children):
            if existing.id == child.id:
                unit.children[index] = child
                return
        unit.children.append(child)

    @staticmethod
    def _aggregate(result: str, children: List[WorkUnit]) -> str:
        """Append a count-only summary of the children to the unit's own result."""
        total = len(children)
        done = sum(1 for c in children if c.state == WorkUnitState.DONE)
        failed = total - done

        if failed == 0:
            summary = f"Subtasks completed: {total} tasks processed successfully."
        else:
            summary = (
                f"Subtasks completed: {total} tasks processed "
                f"({done} done, {failed} failed)."
            )
        return f"{result}\n\n{summary}"

    @staticmethod
    def _fail(unit: WorkUnit, error: Exception) -> None:
        unit.advance_state(WorkUnitState.FAILED)
        unit.result = f"Error: {str(error) or type(error).__name__}"
