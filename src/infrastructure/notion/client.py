"""Notion schema provider.

Reads a database object from the Notion API and keeps only what the
relation checks need. A database response looks like::

    {
        "object": "database",
        "id": "a1b2c3d4-e5f6-7890-abcd-ef1234567890",
        "title": [{"plain_text": "Tags"}],
        "properties": {
            "Taps": {
                "id": "%3AbC",
                "name": "Taps",
                "type": "relation",
                "relation": {
                    "database_id": "0f1e2d3c-4b5a-6978-8796-a5b4c3d2e1f0",
                    "type": "dual_property",
                    "dual_property": {"synced_property_name": "Tag"}
                }
            }
        }
    }
"""

import logging
from typing import Any, Optional

import httpx

from core.config import settings
from core.exceptions import ExternalRefError, SchemaProviderError
from domain.entities.schema import RELATION_KIND, DatabaseSchema, SchemaProperty
from domain.identifiers.external_ref import ExternalRef

logger = logging.getLogger(__name__)


class NotionSchemaProvider:
    """ISchemaProvider backed by the Notion REST API."""

    def __init__(
        self,
        token: str = settings.notion_token,
        base_url: str = settings.notion_api_url,
        notion_version: str = settings.notion_version,
        provider_host: str = settings.notion_host,
        timeout: float = settings.notion_timeout,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._token = token
        self._base_url = base_url.rstrip("/")
        self._notion_version = notion_version
        self._provider_host = provider_host
        self._timeout = timeout
        self._transport = transport

    async def retrieve_schema(self, database_id: ExternalRef) -> DatabaseSchema:
        """Fetch ``GET /databases/{id}`` and map its properties."""
        url = f"{self._base_url}/databases/{database_id.raw}"
        headers = {
            "Authorization": f"Bearer {self._token}",
            "Notion-Version": self._notion_version,
        }

        try:
            async with httpx.AsyncClient(
                transport=self._transport, timeout=self._timeout
            ) as client:
                response = await client.get(url, headers=headers)
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as e:
            logger.warning(
                "Notion returned %s for database %s", e.response.status_code, database_id
            )
            raise SchemaProviderError(
                str(database_id), f"HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            logger.warning("Failed to reach Notion for database %s: %s", database_id, e)
            raise SchemaProviderError(str(database_id), str(e) or type(e).__name__) from e
        except ValueError as e:
            raise SchemaProviderError(str(database_id), "invalid JSON response") from e

        return self._to_schema(database_id, payload)

    def _to_schema(self, database_id: ExternalRef, payload: dict[str, Any]) -> DatabaseSchema:
        """Convert a Notion database object to a DatabaseSchema."""
        properties: dict[str, SchemaProperty] = {}
        for key, prop in (payload.get("properties") or {}).items():
            name = prop.get("name", key)
            kind = prop.get("type", "")
            target = None
            if kind == RELATION_KIND:
                target = self._relation_target(database_id, name, prop.get(RELATION_KIND) or {})
            properties[name] = SchemaProperty(name=name, kind=kind, relation_target=target)

        title = "".join(part.get("plain_text", "") for part in payload.get("title") or [])
        return DatabaseSchema(id=database_id, title=title, properties=properties)

    def _relation_target(
        self, database_id: ExternalRef, name: str, relation: dict[str, Any]
    ) -> Optional[ExternalRef]:
        raw = relation.get("database_id")
        if not raw:
            return None
        try:
            return ExternalRef.parse(raw, self._provider_host)
        except ExternalRefError as e:
            raise SchemaProviderError(
                str(database_id), f"relation {name!r} has invalid target {raw!r}"
            ) from e
