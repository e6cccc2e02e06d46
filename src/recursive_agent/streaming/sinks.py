"""Stream sinks receiving tree snapshots from a run."""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from ..engine.progress import summarize_tree
from ..exceptions import TransportFault
from ..models.work_unit_models import TreeSnapshot, WorkUnit

logger = logging.getLogger(__name__)


class StreamSink(ABC):
    """
    Boundary between the engine and a transport.

    A sink instance can be passed straight to ``RecursiveOrchestrator.run``
    as ``on_update``; it wraps each root snapshot in a TreeSnapshot record.

    CRITICAL: Raise TransportFault when the observer is gone so the run
    stops doing work nobody will see
    """

    def __init__(self):
        self.closed = False
        self.delivered = 0
        self.logger = logging.getLogger(f"{__name__}.{type(self).__name__}")

    async def __call__(self, tree: WorkUnit) -> None:
        if self.closed:
            raise TransportFault(f"{type(self).__name__} is closed")

        await self.send(TreeSnapshot(tree=tree))
        self.delivered += 1

    @abstractmethod
    async def send(self, snapshot: TreeSnapshot) -> None:
        """
        Deliver one snapshot.

        Args:
            snapshot: Full tree record

        Raises:
            TransportFault: If the snapshot cannot be delivered
        """
        pass

    async def close(self) -> None:
        self.closed = True


class CollectingSink(StreamSink):
    """Keeps every snapshot in memory."""

    def __init__(self):
        super().__init__()
        self.snapshots: List[TreeSnapshot] = []

    async def send(self, snapshot: TreeSnapshot) -> None:
        self.snapshots.append(snapshot)

    @property
    def latest(self) -> Optional[TreeSnapshot]:
        return self.snapshots[-1] if self.snapshots else None


class LoggingSink(StreamSink):
    """Logs a one-line progress summary per snapshot."""

    def __init__(self, level: int = logging.INFO):
        super().__init__()
        self.level = level

    async def send(self, snapshot: TreeSnapshot) -> None:
        summary = summarize_tree(snapshot.tree)
        self.logger.log(
            self.level,
            f"Snapshot {self.delivered + 1}: root={snapshot.tree.state.value} "
            f"units={summary['total_units']} done={summary['done_units']} "
            f"failed={summary['failed_units']}",
        )


class QueueSink(StreamSink):
    """
    Hands snapshots to a single consumer through an asyncio.Queue.

    PATTERN: Producer side of the run channel; ``None`` marks the end
    """

    def __init__(self, maxsize: int = 0):
        super().__init__()
        self.queue: "asyncio.Queue[Optional[TreeSnapshot]]" = asyncio.Queue(maxsize=maxsize)

    async def send(self, snapshot: TreeSnapshot) -> None:
        await self.queue.put(snapshot)

    async def close(self) -> None:
        if not self.closed:
            await super().close()
            await self.queue.put(None)
