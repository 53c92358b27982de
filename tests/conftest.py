from __future__ import annotations

import asyncio
from typing import Any

import pytest

from core.domain.models import Category
from core.errors import RemoteOperationError


class FakeCategoryRepository:
    """In-memory server with call recording, injectable failures and gates."""

    def __init__(self, records: list[Category] | None = None) -> None:
        self.server: list[Category] = list(records or [])
        self.calls: list[tuple[Any, ...]] = []
        self.fail: dict[str, str] = {}
        self.gates: dict[str, asyncio.Event] = {}
        self._next_id = max((r.id or 0 for r in self.server), default=0) + 1

    def gate(self, operation: str) -> asyncio.Event:
        event = asyncio.Event()
        self.gates[operation] = event
        return event

    def count(self, operation: str) -> int:
        return sum(1 for call in self.calls if call[0] == operation)

    async def _enter(self, operation: str, *args: Any) -> None:
        self.calls.append((operation, *args))
        gate = self.gates.get(operation)
        if gate is not None:
            await gate.wait()
        if operation in self.fail:
            raise RemoteOperationError(self.fail[operation], operation=operation)

    async def load(self) -> list[Category]:
        # Snapshot at request time, so a gated load answers with stale rows.
        snapshot = [record.model_copy() for record in self.server]
        await self._enter("load")
        return snapshot

    async def create(self, fields: dict[str, Any]) -> str:
        await self._enter("create", dict(fields))
        node_id = f"k{self._next_id}"
        self.server.append(Category(node_id=node_id, id=self._next_id, **fields))
        self._next_id += 1
        return node_id

    async def update(self, node_id: str, fields: dict[str, Any]) -> str:
        await self._enter("update", node_id, dict(fields))
        self.server = [
            record.model_copy(update=fields) if record.node_id == node_id else record
            for record in self.server
        ]
        return node_id

    async def delete(self, node_id: str) -> str:
        await self._enter("delete", node_id)
        self.server = [record for record in self.server if record.node_id != node_id]
        return node_id


@pytest.fixture
def fruit() -> Category:
    return Category(node_id="k1", id=1, description="Fruit")


@pytest.fixture
def repository(fruit: Category) -> FakeCategoryRepository:
    return FakeCategoryRepository([fruit])


@pytest.fixture
def empty_repository() -> FakeCategoryRepository:
    return FakeCategoryRepository()
