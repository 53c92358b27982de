"""Cliente GraphQL mínimo sobre httpx.

Responsabilidad:
- Enviar un documento + variables por POST y devolver `data`.
- Traducir fallos HTTP, de red y el array `errors` de GraphQL a
  `RemoteOperationError` con un mensaje legible.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from core.errors import RemoteOperationError

logger = logging.getLogger(__name__)


def _first_error_message(errors: object) -> str:
    if isinstance(errors, list) and errors:
        first = errors[0]
        if isinstance(first, dict) and isinstance(first.get("message"), str):
            return first["message"]
        return str(first)
    return "Unknown GraphQL error"


class GraphQLClient:
    """Executes GraphQL documents against a single endpoint."""

    def __init__(self, *, url: str, client: httpx.AsyncClient) -> None:
        self._url = url
        self._client = client

    async def execute(
        self,
        document: str,
        variables: dict[str, Any] | None = None,
        *,
        operation: str | None = None,
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {"query": document}
        if variables:
            payload["variables"] = variables

        logger.debug("POST %s (%s)", self._url, operation or "anonymous")
        try:
            response = await self._client.post(self._url, json=payload)
        except httpx.HTTPError as exc:
            raise RemoteOperationError(str(exc) or exc.__class__.__name__, operation=operation) from exc

        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict) and body.get("errors"):
            raise RemoteOperationError(_first_error_message(body["errors"]), operation=operation)

        if response.is_error:
            raise RemoteOperationError(
                f"Response not successful: Received status code {response.status_code}",
                operation=operation,
            )

        if not isinstance(body, dict) or not isinstance(body.get("data"), dict):
            raise RemoteOperationError("Malformed GraphQL response: missing data", operation=operation)
        return body["data"]
