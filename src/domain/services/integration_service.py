"""Startup checks for the Notion integration backend."""

import structlog

from domain.identifiers.external_ref import ExternalRef
from domain.repositories.schema_provider import ISchemaProvider
from domain.services.relation_validator import validate_bidirectional

logger = structlog.get_logger()


class IntegrationService:
    """Validates the integration configuration against the provider's schemas."""

    def __init__(self, provider: ISchemaProvider, provider_host: str) -> None:
        self._provider = provider
        self._provider_host = provider_host

    def parse_reference(self, value: str) -> ExternalRef:
        """Normalize a configured database ID or URL."""
        return ExternalRef.parse(value, self._provider_host)

    async def verify_relation(
        self,
        database_a: str,
        database_b: str,
        field_name_a: str,
        field_name_b: str,
    ) -> None:
        """Confirm the two databases are linked in both directions.

        Runs once before the application accepts traffic; any error is
        raised to the caller unchanged and is not retried.
        """
        id_a = self.parse_reference(database_a)
        id_b = self.parse_reference(database_b)

        schema_a = await self._provider.retrieve_schema(id_a)
        schema_b = await self._provider.retrieve_schema(id_b)

        validate_bidirectional(
            schema_a,
            schema_b,
            field_name_a,
            field_name_b,
            expected_b_id=id_b,
            expected_a_id=id_a,
        )
        logger.info(
            "integration_relation_verified",
            database_a=str(id_a),
            database_b=str(id_b),
            field_a=field_name_a,
            field_b=field_name_b,
        )
