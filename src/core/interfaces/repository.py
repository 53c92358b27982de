"""Contrato del repositorio remoto de categorías.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite sustituir el adaptador GraphQL por un repositorio en memoria en tests.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from core.domain.models import Category


@runtime_checkable
class CategoryRepository(Protocol):
    """Remote query/mutation capability the list controller needs.

    Reglas de diseño:
    - Todas las llamadas son asíncronas porque hacen I/O.
    - Los fallos se reportan con `core.errors.RemoteOperationError`.
    - Update y delete direccionan registros por `node_id`, nunca por `id`.
    """

    async def load(self) -> list[Category]:
        """Fetch every record, in server order."""

        ...

    async def create(self, fields: dict[str, Any]) -> str:
        """Create a record and return its new `node_id`."""

        ...

    async def update(self, node_id: str, fields: dict[str, Any]) -> str:
        """Patch a record and return the confirmed `node_id`."""

        ...

    async def delete(self, node_id: str) -> str:
        """Delete a record and return the removed identity."""

        ...
