"""Two-pointer sweep shared by the edit-set algebra."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Sequence

from .models import Edit


class SweepAction(Enum):
    KEEP = "keep"
    DROP = "drop"


@dataclass(slots=True)
class SweepStats:
    steps: int = 0
    dropped: int = 0
    left_advanced: int = 0
    right_advanced: int = 0


Decision = Callable[[Edit, Edit], SweepAction]


def sweep(left: List[Edit], right: Sequence[Edit], decide: Decision) -> SweepStats:
    """Walk two canonically ordered sequences in lockstep.

    ``decide`` sees the current pair. ``DROP`` deletes the left edit in
    place and re-checks its successor against the same right edit; ``KEEP``
    advances whichever cursor points at the earlier edit. Both inputs must
    already be normalized.
    """

    stats = SweepStats()
    m = 0
    s = 0
    while m < len(left) and s < len(right):
        stats.steps += 1
        current = left[m]
        other = right[s]
        if decide(current, other) is SweepAction.DROP:
            del left[m]
            stats.dropped += 1
            continue
        if current.is_before(other):
            m += 1
            stats.left_advanced += 1
        else:
            s += 1
            stats.right_advanced += 1
    return stats


__all__ = [
    "Decision",
    "SweepAction",
    "SweepStats",
    "sweep",
]
