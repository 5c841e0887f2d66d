"""Conflict resolution that puts a sequence of edits into canonical form."""

from __future__ import annotations

from typing import Dict, Iterable, List, Sequence

from .models import Edit


def canonical_key(edit: Edit) -> tuple[int, int]:
    return (edit.index, edit.tail_index)


def normalize(edits: Iterable[Edit]) -> List[Edit]:
    """Return a sorted, non-overlapping copy of ``edits``.

    Two passes follow the sort. The first keeps only the longest edit per
    starting index. The second drops any edit starting inside the span of
    the last edit kept, or at the same index, so the earliest start wins.
    Applying this to its own output is a no-op.
    """

    ordered = sorted(edits, key=canonical_key)

    widest: Dict[int, int] = {}
    for edit in ordered:
        widest[edit.index] = edit.tail_index
    longest = [edit for edit in ordered if edit.tail_index == widest[edit.index]]

    kept: List[Edit] = []
    for edit in longest:
        if kept:
            previous = kept[-1]
            # Zero-length duplicates never overlap, so compare starts too.
            if edit.index < previous.tail_index or edit.index == previous.index:
                continue
        kept.append(edit)
    return kept


def is_normalized(edits: Sequence[Edit]) -> bool:
    """True when ``edits`` has strictly increasing starts and no overlap."""

    for current, following in zip(edits, edits[1:]):
        if current.index >= following.index:
            return False
        if current.tail_index > following.index:
            return False
    return True


__all__ = [
    "canonical_key",
    "is_normalized",
    "normalize",
]
