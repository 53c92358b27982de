"""Repositorio de categorías sobre GraphQL (API estilo PostGraphile).

Cada operación es exactamente un request: sin polling, sin streaming y sin
caché local. Las respuestas se normalizan como `Category` o como el
`nodeId` confirmado por el servidor.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from adapters.graphql_client import GraphQLClient
from core.domain.models import Category, CategoryConnection
from core.errors import RemoteOperationError

GET_ALL = """
query GetCategories {
  allCategories {
    nodes {
      nodeId
      id
      description
    }
  }
}
"""

ADD_ENTITY = """
mutation AddCategory($description: String!) {
  createCategory(input: { category: { description: $description } }) {
    category {
      nodeId
    }
  }
}
"""

DELETE_ENTITY = """
mutation DeleteCategory($nodeId: ID!) {
  deleteCategory(input: { nodeId: $nodeId }) {
    deletedCategoryId
  }
}
"""

UPDATE_ENTITY = """
mutation UpdateCategory($nodeId: ID!, $description: String!) {
  updateCategory(
    input: { nodeId: $nodeId, categoryPatch: { description: $description } }
  ) {
    category {
      nodeId
    }
  }
}
"""


def _dig(data: dict[str, Any], *path: str, operation: str) -> Any:
    current: Any = data
    for key in path:
        if not isinstance(current, dict) or current.get(key) is None:
            raise RemoteOperationError(
                f"Malformed GraphQL response: missing {'.'.join(path)}",
                operation=operation,
            )
        current = current[key]
    return current


class GraphQLCategoryRepository:
    """`CategoryRepository` implementation backed by a GraphQL endpoint."""

    def __init__(self, client: GraphQLClient) -> None:
        self._client = client

    async def load(self) -> list[Category]:
        data = await self._client.execute(GET_ALL, operation="load")
        connection = _dig(data, "allCategories", operation="load")
        try:
            return CategoryConnection.model_validate(connection).records()
        except (ValidationError, ValueError) as exc:
            raise RemoteOperationError(f"Malformed GraphQL response: {exc}", operation="load") from exc

    async def create(self, fields: dict[str, Any]) -> str:
        data = await self._client.execute(
            ADD_ENTITY,
            {"description": fields.get("description")},
            operation="create",
        )
        return str(_dig(data, "createCategory", "category", "nodeId", operation="create"))

    async def update(self, node_id: str, fields: dict[str, Any]) -> str:
        data = await self._client.execute(
            UPDATE_ENTITY,
            {"nodeId": node_id, "description": fields.get("description")},
            operation="update",
        )
        return str(_dig(data, "updateCategory", "category", "nodeId", operation="update"))

    async def delete(self, node_id: str) -> str:
        data = await self._client.execute(
            DELETE_ENTITY,
            {"nodeId": node_id},
            operation="delete",
        )
        return str(_dig(data, "deleteCategory", "deletedCategoryId", operation="delete"))
