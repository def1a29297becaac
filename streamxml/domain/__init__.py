"""Domain layer: namespace bindings and document lifecycle.

Nothing in here performs I/O.
"""

from .lifecycle import DocumentState
from .namespaces import NamespaceBinding, NamespaceRegistry

__all__ = [
    "DocumentState",
    "NamespaceBinding",
    "NamespaceRegistry",
]
