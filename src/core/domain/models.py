"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- El mismo modelo sirve para filas cargadas del servidor y para borradores.

Nota:
- Estos modelos describen *qué* es un registro, no *cómo* se obtiene.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class Category(BaseModel):
    """A category record, either loaded from the server or held as a draft.

    Server rows always carry `id`, `node_id` and `description`. A draft for a
    new record carries neither identity field; a draft copied from a row
    carries both.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    EDITABLE_FIELDS: ClassVar[tuple[str, ...]] = ("description",)

    node_id: str | None = Field(
        default=None,
        alias="nodeId",
        description="Opaque remote key used to address updates and deletes.",
    )
    id: int | None = Field(
        default=None,
        description="Display identity assigned by the server.",
    )
    description: str | None = Field(
        default=None,
        description="Free text description, the only editable field.",
    )

    @classmethod
    def from_node(cls, payload: dict[str, Any]) -> "Category":
        """Parse a row returned by the list query.

        Raises `ValueError` when the server omits any of the row fields.
        """

        record = cls.model_validate(payload)
        missing = [name for name in ("node_id", "id", "description") if getattr(record, name) is None]
        if missing:
            raise ValueError(f"Record is missing required fields: {', '.join(missing)}")
        return record

    @property
    def is_new(self) -> bool:
        return self.node_id is None

    def editable_values(self) -> dict[str, Any]:
        """Values of the editable fields, keyed by field name."""

        return {name: getattr(self, name) for name in self.EDITABLE_FIELDS}

    def with_field(self, name: str, value: Any) -> "Category":
        """Return a shallow copy with one editable field replaced."""

        if name not in self.EDITABLE_FIELDS:
            raise KeyError(f"{name!r} is not an editable field")
        return self.model_copy(update={name: value})


class CategoryConnection(BaseModel):
    """`allCategories` payload of the list query."""

    model_config = ConfigDict(extra="ignore")

    nodes: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Raw rows, parsed one by one with `Category.from_node`.",
    )

    def records(self) -> list[Category]:
        return [Category.from_node(node) for node in self.nodes]
