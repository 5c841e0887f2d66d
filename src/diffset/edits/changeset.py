"""Edit-set container: normalization, application, and set algebra."""

from __future__ import annotations

from typing import ContextManager, Iterable, Iterator, List, Optional

from diffset.runtime import telemetry

from .models import Edit
from .normalize import normalize
from .sweep import SweepAction, sweep
from .validation import ensure_edit_bounds


class EditSet:
    """Conflict-free, canonically ordered edits against one document.

    Every public operation re-normalizes before it runs, so ``diffs`` may be
    reassigned by callers between calls. ``concat`` is the only operation
    that mutates the receiver; ``subtract`` and ``intersect`` return new sets
    sharing ``content``, ``file_path`` and the (immutable) edits themselves.
    """

    def __init__(
        self,
        *,
        content: str,
        diffs: Iterable[Edit] = (),
        file_path: Optional[str] = None,
        logger_name: Optional[str] = None,
    ) -> None:
        self.file_path = file_path
        self.content = content
        self.diffs: List[Edit] = list(diffs)
        self._logger_name = logger_name
        self._prepare()

    def _prepare(self) -> None:
        before = len(self.diffs)
        self.diffs = normalize(self.diffs)
        dropped = before - len(self.diffs)
        if dropped:
            telemetry.record_event(
                "editset.conflicts_resolved",
                level="debug",
                data={"file": self.file_path or "", "dropped": dropped},
                logger_name=self._logger_name,
            )

    def _derive(self, diffs: Iterable[Edit]) -> "EditSet":
        return EditSet(
            content=self.content,
            diffs=diffs,
            file_path=self.file_path,
            logger_name=self._logger_name,
        )

    def _span(
        self, operation: str, **counts: int
    ) -> ContextManager[telemetry.OperationSpan]:
        return telemetry.operation_span(
            operation,
            file_path=self.file_path,
            logger_name=self._logger_name,
            **counts,
        )

    def __len__(self) -> int:
        return len(self.diffs)

    def __iter__(self) -> Iterator[Edit]:
        return iter(self.diffs)

    def __contains__(self, edit: object) -> bool:
        return edit in self.diffs

    def __repr__(self) -> str:
        return f"EditSet(file_path={self.file_path!r}, diffs={self.diffs!r})"

    def copy(self) -> "EditSet":
        return self._derive(self.diffs)

    def concat(self, other: "EditSet") -> "EditSet":
        """Append ``other``'s edits to this set and re-normalize in place.

        Not symmetric when the two sets collide: after sorting, the longer
        edit at a shared start survives, otherwise the earlier start does.
        """

        with self._span("concat", incoming=len(other.diffs)) as handle:
            self.diffs = self.diffs + other.diffs
            self._prepare()
            handle.count("size", len(self.diffs))
            return self

    def apply(self, text: Optional[str] = None) -> str:
        """Materialize the edited text; ``text`` defaults to ``content``."""

        with self._span("apply") as handle:
            self._prepare()
            result = self.content if text is None else text
            delta = 0
            skipped = 0
            for diff in self.diffs:
                applied = diff.apply(result, delta)
                if applied is None:
                    skipped += 1
                    continue
                result = applied.text
                delta = applied.delta
            handle.count("applied", len(self.diffs) - skipped)
            handle.count("skipped", skipped)
            return result

    def subtract(self, subtrahend: "EditSet") -> "EditSet":
        """Drop edits colliding with ``subtrahend`` unless they enclose the hit."""

        with self._span("subtract", subtrahend=len(subtrahend.diffs)) as handle:
            self._prepare()
            subtrahend._prepare()
            result = self._derive(self.diffs)

            def decide(minuend: Edit, other: Edit) -> SweepAction:
                if minuend.is_collide(other) and not minuend.is_encloser(other):
                    return SweepAction.DROP
                return SweepAction.KEEP

            stats = sweep(result.diffs, subtrahend.diffs, decide)
            handle.count("removed", stats.dropped)
            return result

    def intersect(self, audit: "EditSet") -> "EditSet":
        """Keep only the edits that collide with at least one ``audit`` edit."""

        with self._span("intersect", audit=len(audit.diffs)) as handle:
            self._prepare()
            audit._prepare()
            collected: List[Edit] = []

            def decide(base: Edit, other: Edit) -> SweepAction:
                if base.is_collide(other) and base not in collected:
                    collected.append(base)
                return SweepAction.KEEP

            sweep(list(self.diffs), audit.diffs, decide)
            handle.count("kept", len(collected))
            return self._derive(collected)

    def validate(self) -> "EditSet":
        """Raise ``EditBoundsError`` for the first edit past the end of ``content``."""

        with self._span("validate", size=len(self.diffs)):
            self._prepare()
            for diff in self.diffs:
                ensure_edit_bounds(self.content, diff)
            return self


__all__ = [
    "EditSet",
]
