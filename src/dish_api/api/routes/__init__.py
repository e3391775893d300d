"""API routes."""

from . import recognition

__all__ = ["recognition"]
