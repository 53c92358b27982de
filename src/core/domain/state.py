"""Estados de operaciones remotas y de la vista.

Por qué explícito:
- Cada operación (load/create/update/delete) lleva su propio estado en vez de
  un trío implícito loading/error/data.
- La vista se deriva de esos estados con una regla fija y testeable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from core.domain.models import Category


class OperationStatus(str, Enum):
    """Lifecycle of one remote operation."""

    IDLE = "idle"
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class OperationState:
    """Tagged result of a remote operation: Idle, Pending, Succeeded(value) or Failed(message)."""

    status: OperationStatus = OperationStatus.IDLE
    value: Any = None
    message: str | None = None

    @classmethod
    def idle(cls) -> "OperationState":
        return cls()

    @classmethod
    def pending(cls) -> "OperationState":
        return cls(status=OperationStatus.PENDING)

    @classmethod
    def succeeded(cls, value: Any = None) -> "OperationState":
        return cls(status=OperationStatus.SUCCEEDED, value=value)

    @classmethod
    def failed(cls, message: str) -> "OperationState":
        return cls(status=OperationStatus.FAILED, message=message)

    @property
    def loading(self) -> bool:
        return self.status is OperationStatus.PENDING

    @property
    def error(self) -> str | None:
        return self.message if self.status is OperationStatus.FAILED else None

    @property
    def data(self) -> Any:
        return self.value if self.status is OperationStatus.SUCCEEDED else None


class ViewKind(str, Enum):
    LOADING = "loading"
    ERROR = "error"
    EMPTY = "empty"
    ROWS = "rows"


@dataclass(frozen=True)
class ListView:
    """What the list screen shows on this render pass."""

    kind: ViewKind
    message: str | None = None
    records: list[Category] = field(default_factory=list)

    @classmethod
    def loading(cls) -> "ListView":
        return cls(kind=ViewKind.LOADING)

    @classmethod
    def error(cls, message: str) -> "ListView":
        return cls(kind=ViewKind.ERROR, message=message)

    @classmethod
    def empty(cls) -> "ListView":
        return cls(kind=ViewKind.EMPTY)

    @classmethod
    def rows(cls, records: list[Category]) -> "ListView":
        return cls(kind=ViewKind.ROWS, records=list(records))
