"""Positional edits and the conflict-free edit-set algebra built on them."""

from .changeset import EditSet
from .models import AppliedEdit, Edit
from .normalize import canonical_key, is_normalized, normalize
from .sweep import SweepAction, SweepStats, sweep
from .validation import EditBoundsError, ensure_edit_bounds

__all__ = [
    "AppliedEdit",
    "Edit",
    "EditSet",
    "EditBoundsError",
    "SweepAction",
    "SweepStats",
    "canonical_key",
    "ensure_edit_bounds",
    "is_normalized",
    "normalize",
    "sweep",
]
