"""CLI de catalog-d2 (Typer + Rich).

Cada comando reproduce una interacción de la pantalla de categorías:
cargar la lista, abrir el editor, guardar o borrar, esperar la recarga y
renderizar el resultado. `shell` ofrece el ciclo interactivo completo.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.prompt import Prompt

from adapters.graphql_client import GraphQLClient
from adapters.graphql_repository import GraphQLCategoryRepository
from adapters.http_client import build_async_client
from adapters.json_exporter import export_categories_json
from cli import doctor
from cli.ui_components import (
    RichModalDialog,
    build_detail_form,
    print_banner,
    render_list_view,
)
from core.config import AppSettings
from core.domain.models import Category
from core.domain.state import ViewKind
from core.services.list_controller import CategoryListController

app = typer.Typer(no_args_is_help=True, help="Manage categories through a GraphQL API.")
app.add_typer(doctor.app, name="doctor")

_console = Console()

SHELL_HELP = "[bold]n[/]ew  [bold]e[/]dit <id>  [bold]d[/]elete <id>  [bold]r[/]eload  [bold]q[/]uit"


def load_settings() -> AppSettings:
    try:
        return AppSettings()
    except ValidationError as exc:
        raise typer.BadParameter(f"Invalid configuration: {exc}") from exc


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


@asynccontextmanager
async def open_controller(settings: AppSettings) -> AsyncIterator[CategoryListController]:
    """Wire httpx -> GraphQL -> repository -> controller for one command."""

    async with build_async_client(settings) as client:
        repository = GraphQLCategoryRepository(GraphQLClient(url=settings.graphql_url, client=client))
        controller = CategoryListController(repository, entity_name=settings.entity_name)
        try:
            yield controller
        finally:
            await controller.wait_idle()


def parse_command(raw: str) -> tuple[str, int | None]:
    """Parse a shell line like `e 3` into `("edit", 3)`."""

    parts = raw.strip().split()
    if not parts:
        return "", None
    aliases = {
        "n": "new",
        "e": "edit",
        "d": "delete",
        "r": "reload",
        "q": "quit",
    }
    verb = aliases.get(parts[0].lower(), parts[0].lower())
    if len(parts) < 2:
        return verb, None
    try:
        return verb, int(parts[1])
    except ValueError:
        return verb, None


def _show(controller: CategoryListController) -> bool:
    view = controller.view()
    _console.print(render_list_view(view, title=f"{controller.entity_name} list"))
    return view.kind is not ViewKind.ERROR


def _require_row(controller: CategoryListController, record_id: int) -> Category:
    record = controller.find(record_id)
    if record is not None:
        return record
    if not _show(controller):
        raise typer.Exit(code=1)
    raise typer.BadParameter(f"No {controller.entity_name.lower()} with id {record_id}")


def _fill_draft(controller: CategoryListController, description: str) -> None:
    editor = controller.detail_editor()
    editor.change("description", description)


async def _run_list(settings: AppSettings, json_path: Path | None) -> bool:
    async with open_controller(settings) as controller:
        await controller.load()
        ok = _show(controller)
        if ok and json_path is not None:
            path = export_categories_json(records=controller.records, output_path=json_path)
            _console.print(f"[green]Saved JSON to:[/green] {path}")
        return ok


async def _run_new(settings: AppSettings, description: str) -> bool:
    async with open_controller(settings) as controller:
        await controller.load()
        if controller.view().kind is ViewKind.ERROR:
            return _show(controller)
        controller.open()
        _fill_draft(controller, description)
        if controller.save() is None:
            raise typer.BadParameter("description must not be empty")
        await controller.wait_idle()
        return _show(controller)


async def _run_edit(settings: AppSettings, record_id: int, description: str) -> bool:
    async with open_controller(settings) as controller:
        await controller.load()
        controller.open_for(_require_row(controller, record_id))
        _fill_draft(controller, description)
        if controller.save() is None:
            raise typer.BadParameter("description must not be empty")
        await controller.wait_idle()
        return _show(controller)


async def _run_delete(settings: AppSettings, record_id: int) -> bool:
    async with open_controller(settings) as controller:
        await controller.load()
        controller.delete_row(_require_row(controller, record_id))
        await controller.wait_idle()
        return _show(controller)


async def _ask(prompt: str, **kwargs: object) -> str:
    # Prompts block, so they run off the loop and writes keep settling meanwhile.
    return await asyncio.to_thread(Prompt.ask, prompt, console=_console, **kwargs)


async def _edit_in_dialog(controller: CategoryListController, dialog: RichModalDialog) -> None:
    editor = controller.detail_editor()
    for name in editor.fields:
        value = await _ask(editor.label(name), default=editor.value(name))
        editor.change(name, value)

    panel = dialog.render(
        controller.editor_title,
        controller.editor_open,
        controller.close,
        controller.save,
        controller.save_enabled,
        build_detail_form(controller.detail_editor()),
    )
    if panel is not None:
        _console.print(panel)
    action = await _ask("Action", choices=dialog.actions, default=dialog.actions[0])
    dialog.trigger(action)


async def _run_shell(settings: AppSettings) -> None:
    print_banner(_console)
    dialog = RichModalDialog()
    async with open_controller(settings) as controller:
        await controller.load()
        while True:
            _show(controller)
            verb, record_id = parse_command(await _ask(SHELL_HELP, default="r"))
            if verb == "quit":
                break
            if verb == "reload":
                await controller.load()
            elif verb == "new":
                controller.open()
                await _edit_in_dialog(controller, dialog)
            elif verb in ("edit", "delete") and controller.view().kind is ViewKind.ERROR:
                _console.print("[yellow]Edit and delete are unavailable while an error is shown.[/yellow]")
            elif verb in ("edit", "delete"):
                record = controller.find(record_id) if record_id is not None else None
                if record is None:
                    _console.print(f"[yellow]Unknown id:[/yellow] {record_id}")
                    continue
                if verb == "edit":
                    controller.open_for(record)
                    await _edit_in_dialog(controller, dialog)
                else:
                    controller.delete_row(record)
            else:
                _console.print(f"[yellow]Unknown command:[/yellow] {verb}")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log requests and reloads."),
) -> None:
    settings = load_settings()
    configure_logging("DEBUG" if verbose else settings.log_level)


@app.command(name="list")
def list_records(
    json_path: Path | None = typer.Option(None, "--json", help="Also export the rows to a JSON file."),
) -> None:
    """Load and show every record."""

    if not asyncio.run(_run_list(load_settings(), json_path)):
        raise typer.Exit(code=1)


@app.command()
def new(
    description: str = typer.Option(..., "--description", "-d", help="Description of the new record."),
) -> None:
    """Create a record, then show the reloaded list."""

    if not asyncio.run(_run_new(load_settings(), description)):
        raise typer.Exit(code=1)


@app.command()
def edit(
    record_id: int = typer.Argument(..., help="ID shown in the list."),
    description: str = typer.Option(..., "--description", "-d", help="New description."),
) -> None:
    """Update a record's description, then show the reloaded list."""

    if not asyncio.run(_run_edit(load_settings(), record_id, description)):
        raise typer.Exit(code=1)


@app.command()
def delete(
    record_id: int = typer.Argument(..., help="ID shown in the list."),
) -> None:
    """Delete a record right away (no confirmation), then show the reloaded list."""

    if not asyncio.run(_run_delete(load_settings(), record_id)):
        raise typer.Exit(code=1)


@app.command()
def shell() -> None:
    """Interactive list with New / Edit / Delete and a modal editor."""

    asyncio.run(_run_shell(load_settings()))


def run() -> None:
    app()
