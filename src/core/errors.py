"""Errores del Core.

Por qué una sola familia:
- El controlador solo distingue "la operación remota falló" del resto.
- Cualquier clasificación (transitorio/permanente) pertenece al transporte.
"""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for catalog-d2 errors."""


class RemoteOperationError(CatalogError):
    """A remote load/create/update/delete call failed.

    The message is opaque and shown verbatim to the user.
    """

    def __init__(self, message: str, *, operation: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.operation = operation
