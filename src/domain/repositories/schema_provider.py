"""Schema provider protocol."""

from typing import Protocol

from domain.entities.schema import DatabaseSchema
from domain.identifiers.external_ref import ExternalRef


class ISchemaProvider(Protocol):
    """Reads database schemas from the integration backend."""

    async def retrieve_schema(self, database_id: ExternalRef) -> DatabaseSchema:
        """Fetch the schema of one database."""
        ...
