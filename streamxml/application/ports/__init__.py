"""Port interfaces for external collaborators.

The writer only talks to the sink and the logger through these protocols,
so tests and callers can substitute their own implementations.
"""

from .services import LoggerPort
from .sink import XmlSinkPort

__all__ = [
    "LoggerPort",
    "XmlSinkPort",
]
