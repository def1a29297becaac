"""Infrastructure layer for streamxml.

This layer contains the concrete sink, logging adapters and the factory
that wires them into an ElementWriter.
"""

__all__ = []
