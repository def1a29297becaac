"""Application layer: the element writer and the ports it depends on."""

__all__ = []
