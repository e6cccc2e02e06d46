"""Snapshot streaming: sinks and SSE framing."""

from .sinks import StreamSink, CollectingSink, LoggingSink, QueueSink
from .sse import format_sse_event, stream_snapshots, sse_event_stream

__all__ = [
    "StreamSink",
    "CollectingSink",
    "LoggingSink",
    "QueueSink",
    "format_sse_event",
    "stream_snapshots",
    "sse_event_stream",
]
