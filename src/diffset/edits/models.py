"""Value types describing a single positional text edit."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True)
class AppliedEdit:
    """Result of applying one edit: the new text and the running delta."""

    text: str
    delta: int


@dataclass(frozen=True, slots=True)
class Edit:
    """Immutable replacement of the half-open span ``[index, tail_index)``.

    Offsets always refer to the original content the edit was produced
    against. ``apply`` shifts them by the cumulative ``delta`` of every edit
    applied before it.

    ``replacement=None`` produces an edit that always declines to apply.
    When ``expected`` is set the edit also declines unless the shifted span
    still holds exactly that text.
    """

    index: int
    tail_index: int
    replacement: Optional[str] = None
    expected: Optional[str] = None
    rule_id: Optional[str] = None
    label: str = ""

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError(f"index must be non-negative, got {self.index}")
        if self.tail_index < self.index:
            raise ValueError(
                f"tail_index ({self.tail_index}) must not precede index ({self.index})"
            )

    @classmethod
    def replace(
        cls, start: int, end: int, text: str, *, rule_id: str | None = None
    ) -> "Edit":
        return cls(start, end, text, rule_id=rule_id)

    @classmethod
    def insert(cls, position: int, text: str, *, rule_id: str | None = None) -> "Edit":
        return cls(position, position, text, rule_id=rule_id)

    @classmethod
    def delete(cls, start: int, end: int, *, rule_id: str | None = None) -> "Edit":
        return cls(start, end, "", rule_id=rule_id)

    @property
    def span(self) -> tuple[int, int]:
        return (self.index, self.tail_index)

    @property
    def length(self) -> int:
        return self.tail_index - self.index

    @property
    def is_insertion(self) -> bool:
        return self.index == self.tail_index

    def apply(self, content: str, delta: int = 0) -> Optional[AppliedEdit]:
        """Return ``content`` with this edit applied, or ``None`` to skip it."""

        if self.replacement is None:
            return None
        start = self.index + delta
        end = self.tail_index + delta
        if start < 0 or end > len(content):
            return None
        if self.expected is not None and content[start:end] != self.expected:
            return None
        return AppliedEdit(
            text=content[:start] + self.replacement + content[end:],
            delta=delta + len(self.replacement) - self.length,
        )

    def is_collide(self, other: "Edit") -> bool:
        return self.index < other.tail_index and other.index < self.tail_index

    def is_encloser(self, other: "Edit") -> bool:
        return self.index <= other.index and self.tail_index >= other.tail_index

    def is_before(self, other: "Edit") -> bool:
        """Canonical order: by ``index``, then by ``tail_index``."""

        return (self.index, self.tail_index) < (other.index, other.tail_index)


__all__ = [
    "AppliedEdit",
    "Edit",
]
