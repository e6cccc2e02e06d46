"""Run-scoped cancellation token."""

import asyncio
from typing import Optional


class CancellationToken:
    """Checked by the orchestrator before each recursive sub-task call."""

    def __init__(self):
        self._event = asyncio.Event()
        self.reason: Optional[str] = None

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self, reason: str = "cancelled") -> None:
        if not self._event.is_set():
            self.reason = reason
            self._event.set()
