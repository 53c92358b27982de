"""Detail editor for a single draft record.

The editor owns nothing: it is handed the current draft and the setter of
the list controller, and every change replaces the whole draft with a
shallow copy carrying the new value. It has no idea whether a save is
allowed, pending or failed.
"""

from __future__ import annotations

from typing import Callable

from core.domain.models import Category


class DetailEditor:
    """Form logic bound to a draft `Category`."""

    def __init__(self, draft: Category | None, set_draft: Callable[[Category], None]) -> None:
        self._draft = draft
        self._set_draft = set_draft

    @property
    def draft(self) -> Category | None:
        return self._draft

    @property
    def fields(self) -> tuple[str, ...]:
        return Category.EDITABLE_FIELDS

    @staticmethod
    def label(name: str) -> str:
        return name.replace("_", " ").capitalize()

    def value(self, name: str) -> str:
        """Current input value; missing values render as an empty string."""

        if self._draft is None:
            return ""
        current = getattr(self._draft, name)
        return "" if current is None else str(current)

    def change(self, name: str, value: str) -> Category:
        """Report one keystroke (or a whole new value) for field `name`."""

        base = self._draft if self._draft is not None else Category()
        updated = base.with_field(name, value)
        # Mirrors a re-render: the next change builds on what was handed up.
        self._draft = updated
        self._set_draft(updated)
        return updated
