"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- El controlador produce un `ListView`; aquí solo se decide cómo se ve.
"""

from __future__ import annotations

from typing import Any, Callable

from rich.align import Align
from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import Category
from core.domain.state import ListView, ViewKind
from core.services.detail_editor import DetailEditor

LOADING_TEXT = "Loading..."
EMPTY_TEXT = "No records found."


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida (solo en modo interactivo)."""

    title = Text("CATALOG-D2", style="bold cyan")
    subtitle = Text("Categories • GraphQL • Refetch after every write", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_categories_table(records: list[Category], *, title: str | None = None) -> Table:
    """One row per record, in the order the server returned them."""

    table = Table(title=title)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Description", style="white")
    table.add_column("Actions", style="magenta", justify="right")
    for record in records:
        table.add_row(str(record.id), record.description or "", "Edit Delete")
    return table


def render_list_view(view: ListView, *, title: str | None = None) -> RenderableType:
    """Loading text, a single error line, the empty notice, or the table."""

    if view.kind is ViewKind.LOADING:
        return Text(LOADING_TEXT, style="dim")
    if view.kind is ViewKind.ERROR:
        return Text(f"Error: {view.message}", style="bold red")
    if view.kind is ViewKind.EMPTY:
        return Text(EMPTY_TEXT, style="yellow")
    return build_categories_table(view.records, title=title)


def build_detail_form(editor: DetailEditor) -> Table:
    """Label/value grid for the fields of the draft."""

    grid = Table.grid(padding=(0, 2))
    grid.add_column(style="bold")
    grid.add_column()
    for name in editor.fields:
        grid.add_row(editor.label(name), editor.value(name) or Text("(empty)", style="dim"))
    return grid


class RichModalDialog:
    """Modal shell drawn as a Rich panel.

    Holds the callbacks of the last render so the command loop can trigger
    `save` or `cancel`; it never touches the draft itself.
    """

    def __init__(self) -> None:
        self._on_close: Callable[[], None] | None = None
        self._on_save: Callable[[], Any] | None = None
        self.save_enabled = False

    def render(
        self,
        title: str,
        is_open: bool,
        on_close: Callable[[], None],
        on_save: Callable[[], Any],
        save_enabled: bool,
        content: Any,
    ) -> Panel | None:
        if not is_open:
            self._on_close = None
            self._on_save = None
            self.save_enabled = False
            return None

        self._on_close = on_close
        self._on_save = on_save
        self.save_enabled = save_enabled

        buttons = Text.assemble(
            ("[Save]", "bold green" if save_enabled else "dim strike"),
            "  ",
            ("[Cancel]", "bold"),
        )
        body = Group(content, Text(""), Align.right(buttons))
        return Panel(body, title=Text(title, style="bold"), border_style="blue")

    @property
    def actions(self) -> list[str]:
        if self._on_close is None:
            return []
        return ["save", "cancel"] if self.save_enabled else ["cancel"]

    def trigger(self, action: str) -> Any:
        if action not in self.actions:
            raise ValueError(f"Action {action!r} is not available")
        handler = self._on_save if action == "save" else self._on_close
        if handler is None:
            raise ValueError(f"Action {action!r} is not available")
        return handler()
