"""streamxml package.

A streaming, namespace-aware XML writer. Documents are written element by
element straight to a sink, without building a tree in memory.

Features:
- Prefix registry with a current-namespace cursor and per-call overrides
- Root-level namespace declarations written exactly once
- Fluent, chainable write calls
- A single WriteFailure error for every sink failure
"""

from importlib.metadata import PackageNotFoundError, version

try:  # pragma: no cover
    __version__ = version("streamxml")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

# Core exports
from streamxml.application.element_writer import ElementWriter
from streamxml.config import ConfigLoader, WriterConfig
from streamxml.domain import DocumentState, NamespaceBinding, NamespaceRegistry
from streamxml.exceptions import (
    LifecycleViolation,
    StreamXmlError,
    UnknownNamespaceError,
    WriteFailure,
)
from streamxml.infrastructure.container import create_stream_writer
from streamxml.infrastructure.io import SinkError, StreamSink

__all__ = [
    "__version__",
    # Writer
    "ElementWriter",
    "create_stream_writer",
    "StreamSink",
    # Namespaces
    "NamespaceBinding",
    "NamespaceRegistry",
    "DocumentState",
    # Configuration
    "ConfigLoader",
    "WriterConfig",
    # Errors
    "StreamXmlError",
    "LifecycleViolation",
    "UnknownNamespaceError",
    "WriteFailure",
    "SinkError",
]
