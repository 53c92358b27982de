"""Contrato del shell modal que aloja al editor de detalle."""

from __future__ import annotations

from typing import Any, Callable, Protocol, runtime_checkable


@runtime_checkable
class EditorShell(Protocol):
    """A modal surface with save/cancel actions and no business logic."""

    def render(
        self,
        title: str,
        is_open: bool,
        on_close: Callable[[], None],
        on_save: Callable[[], Any],
        save_enabled: bool,
        content: Any,
    ) -> Any:
        ...
