"""Resolve and compose sets of positional text edits against one document."""

from .edits import Edit, EditSet

__all__ = [
    "Edit",
    "EditSet",
    "edits",
    "runtime",
]

__version__ = "0.1.0"
