"""I/O adapters: concrete sinks the writer can drive."""

from .exceptions import SinkError
from .stream_sink import StreamSink

__all__ = [
    "SinkError",
    "StreamSink",
]
