"""Live console sink redrawing the tree on every snapshot."""

import logging
from typing import Optional

from rich.live import Live

from .renderer import TreeRenderer
from ...models.work_unit_models import TreeSnapshot
from ...streaming.sinks import StreamSink

logger = logging.getLogger(__name__)


class LiveTreeSink(StreamSink):
    """
    Stream sink backed by a rich Live display.

    Use as an async context manager so the display is always stopped.
    """

    def __init__(self, renderer: Optional[TreeRenderer] = None, refresh_per_second: int = 8):
        super().__init__()
        self.renderer = renderer or TreeRenderer()
        self.refresh_per_second = refresh_per_second
        self._live: Optional[Live] = None

    async def __aenter__(self) -> "LiveTreeSink":
        self._live = Live(
            console=self.renderer.console,
            refresh_per_second=self.refresh_per_second,
            transient=False,
        )
        self._live.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def send(self, snapshot: TreeSnapshot) -> None:
        if self._live is None:
            self.renderer.render(snapshot.tree)
            return
        self._live.update(self.renderer.build(snapshot.tree), refresh=True)

    async def close(self) -> None:
        if self._live is not None:
            self._live.stop()
            self._live = None
        await super().close()
