"""CLI output module."""

from .renderer import TreeRenderer, STATUS_STYLES
from .live import LiveTreeSink

__all__ = [
    "TreeRenderer",
    "STATUS_STYLES",
    "LiveTreeSink",
]
