"""Controlador de la lista de categorías (refetch-driven CRUD).

Por qué un controlador aparte:
- Concentra el estado de edición (`editor_open`, `draft`) y la orquestación
  load/create/update/delete, sin printing ni widgets.
- La CLI y los tests consumen la misma lógica; la vista es un `ListView`.

Modelo de consistencia:
- Nunca se parchea la lista en memoria. Toda escritura, exitosa o fallida,
  termina con una recarga completa y la lista mostrada es siempre el último
  resultado de Load.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable

from core.domain.models import Category
from core.domain.state import ListView, OperationState, OperationStatus
from core.errors import RemoteOperationError
from core.interfaces.repository import CategoryRepository
from core.services.detail_editor import DetailEditor

logger = logging.getLogger(__name__)

# Order in which operation errors win the single error banner.
ERROR_PRIORITY: tuple[str, ...] = ("load", "create", "delete", "update")


class CategoryListController:
    """List/edit/delete manager for one entity type backed by a remote repository.

    All methods run on one event loop. `save()` and `delete_row()` schedule the
    write and return immediately; the reload that follows each write is issued
    only once that write has settled.
    """

    def __init__(
        self,
        repository: CategoryRepository,
        *,
        entity_name: str = "Category",
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self._repository = repository
        self.entity_name = entity_name
        self._on_change = on_change

        self.editor_open = False
        self.draft: Category | None = None

        self._states: dict[str, OperationState] = {
            name: OperationState.idle() for name in ERROR_PRIORITY
        }
        self._tasks: set[asyncio.Task[None]] = set()

    # -- operation states -------------------------------------------------

    def state(self, operation: str) -> OperationState:
        return self._states[operation]

    @property
    def load_state(self) -> OperationState:
        return self._states["load"]

    @property
    def create_state(self) -> OperationState:
        return self._states["create"]

    @property
    def update_state(self) -> OperationState:
        return self._states["update"]

    @property
    def delete_state(self) -> OperationState:
        return self._states["delete"]

    def _set_state(self, operation: str, state: OperationState) -> None:
        self._states[operation] = state
        if self._on_change is not None:
            self._on_change()

    # -- editor -------------------------------------------------------------

    @property
    def editor_title(self) -> str:
        return f"New {self.entity_name}"

    @property
    def save_enabled(self) -> bool:
        return bool(self.draft is not None and self.draft.description)

    def open(self) -> None:
        """Open the editor on an empty draft ("New")."""

        self.draft = None
        self.editor_open = True

    def open_for(self, record: Category) -> None:
        """Open the editor on a copy of an existing row ("Edit")."""

        self.draft = record.model_copy()
        self.editor_open = True

    def close(self) -> None:
        """Close the editor; the draft is abandoned, nothing is persisted."""

        self.editor_open = False
        self.draft = None

    def set_draft(self, draft: Category | None) -> None:
        self.draft = draft

    def detail_editor(self) -> DetailEditor:
        return DetailEditor(self.draft, self.set_draft)

    def save(self) -> asyncio.Task[None] | None:
        """Dispatch Create or Update for the draft and close the editor.

        The editor closes before the write settles; a failed write shows up
        only as the error banner on a later render. Returns the scheduled
        write task, or `None` when saving is not enabled.
        """

        if not self.save_enabled:
            logger.debug("Save ignored: draft has no description")
            return None

        draft = self.draft
        if draft is None:
            return None
        fields = draft.editable_values()
        node_id = draft.node_id

        if node_id is not None:
            task = self._dispatch("update", lambda: self._repository.update(node_id, fields))
        else:
            task = self._dispatch("create", lambda: self._repository.create(fields))

        self.editor_open = False
        self.draft = None
        return task

    def delete_row(self, record: Category) -> asyncio.Task[None]:
        """Delete a row right away; no editor and no confirmation."""

        node_id = record.node_id
        if node_id is None:
            raise ValueError("Only loaded records can be deleted")
        return self._dispatch("delete", lambda: self._repository.delete(node_id))

    # -- remote calls -------------------------------------------------------

    async def load(self) -> None:
        """Fetch the full list and replace whatever was displayed.

        Only the first load shows as pending; later reloads keep the previous
        result on screen until they settle. The last reload to settle wins.
        """

        if self.load_state.status is OperationStatus.IDLE:
            self._set_state("load", OperationState.pending())

        logger.debug("Loading %s list", self.entity_name)
        try:
            records = await self._repository.load()
        except RemoteOperationError as exc:
            logger.warning("Loading %s list failed: %s", self.entity_name, exc.message)
            self._set_state("load", OperationState.failed(exc.message))
        else:
            logger.debug("Loaded %d %s record(s)", len(records), self.entity_name)
            self._set_state("load", OperationState.succeeded(list(records)))

    def _dispatch(
        self,
        operation: str,
        call: Callable[[], Awaitable[Any]],
    ) -> asyncio.Task[None]:
        self._set_state(operation, OperationState.pending())
        task = asyncio.get_running_loop().create_task(self._run_write(operation, call))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run_write(self, operation: str, call: Callable[[], Awaitable[Any]]) -> None:
        logger.debug("Dispatching %s on %s", operation, self.entity_name)
        try:
            result = await call()
        except RemoteOperationError as exc:
            logger.warning("%s %s failed: %s", operation.capitalize(), self.entity_name, exc.message)
            self._set_state(operation, OperationState.failed(exc.message))
        else:
            self._set_state(operation, OperationState.succeeded(result))
        finally:
            # Reload after every settle, success or failure.
            await self.load()

    async def wait_idle(self) -> None:
        """Wait until every write issued so far, and its reload, has settled."""

        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    # -- view ---------------------------------------------------------------

    @property
    def records(self) -> list[Category]:
        data = self.load_state.data
        return list(data) if data else []

    def find(self, record_id: int) -> Category | None:
        for record in self.records:
            if record.id == record_id:
                return record
        return None

    def first_error(self) -> str | None:
        for operation in ERROR_PRIORITY:
            message = self._states[operation].error
            if message is not None:
                return message
        return None

    def view(self) -> ListView:
        """Derive what the screen shows: loading, one error, empty, or rows."""

        if self.load_state.status in (OperationStatus.IDLE, OperationStatus.PENDING):
            return ListView.loading()

        message = self.first_error()
        if message is not None:
            return ListView.error(message)

        records = self.records
        if not records:
            return ListView.empty()
        return ListView.rows(records)
