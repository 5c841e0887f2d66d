"""Bounds checks for edits against the content they target."""

from __future__ import annotations

from .models import Edit


class EditBoundsError(RuntimeError):
    """Raised when an edit's span reaches past the end of its content."""

    def __init__(self, message: str, *, edit: Edit, content_length: int) -> None:
        super().__init__(message)
        self.edit = edit
        self.content_length = content_length


def _describe(edit: Edit) -> str:
    origin = " ".join(part for part in (edit.rule_id, edit.label) if part)
    return f"Edit {edit.span} [{origin}]" if origin else f"Edit {edit.span}"


def ensure_edit_bounds(content: str, edit: Edit) -> Edit:
    if edit.tail_index > len(content):
        raise EditBoundsError(
            f"{_describe(edit)} exceeds content length {len(content)}",
            edit=edit,
            content_length=len(content),
        )
    return edit
