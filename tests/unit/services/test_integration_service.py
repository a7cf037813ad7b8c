"""Unit tests for IntegrationService."""

from unittest.mock import AsyncMock

import pytest

from core.exceptions import BadFormatError, SchemaProviderError, WrongTargetError
from domain.entities.schema import DatabaseSchema, SchemaProperty
from domain.identifiers.external_ref import ExternalRef
from domain.services.integration_service import IntegrationService

HOST = "www.notion.so"
TAGS_RAW = "a1b2c3d4e5f67890abcdef1234567890"
TAPS_RAW = "0f1e2d3c4b5a69788796a5b4c3d2e1f0"
TAGS_ID = ExternalRef.parse(TAGS_RAW, HOST)
TAPS_ID = ExternalRef.parse(TAPS_RAW, HOST)


def _schemas(tags_target: ExternalRef, taps_target: ExternalRef) -> dict[ExternalRef, DatabaseSchema]:
    return {
        TAGS_ID: DatabaseSchema(
            id=TAGS_ID,
            properties={"Taps": SchemaProperty("Taps", "relation", tags_target)},
        ),
        TAPS_ID: DatabaseSchema(
            id=TAPS_ID,
            properties={"Tag": SchemaProperty("Tag", "relation", taps_target)},
        ),
    }


@pytest.fixture
def provider() -> AsyncMock:
    provider = AsyncMock()
    schemas = _schemas(TAPS_ID, TAGS_ID)
    provider.retrieve_schema.side_effect = lambda ref: schemas[ref]
    return provider


@pytest.fixture
def service(provider: AsyncMock) -> IntegrationService:
    return IntegrationService(provider, provider_host=HOST)


class TestVerifyRelation:
    @pytest.mark.asyncio
    async def test_accepts_urls_and_bare_ids(self, service: IntegrationService, provider: AsyncMock):
        await service.verify_relation(
            f"https://{HOST}/team/Tags-{TAGS_RAW}?v=1",
            TAPS_RAW,
            "Taps",
            "Tag",
        )

        assert [c.args[0] for c in provider.retrieve_schema.call_args_list] == [TAGS_ID, TAPS_ID]

    @pytest.mark.asyncio
    async def test_rejects_foreign_url_before_fetching(
        self, service: IntegrationService, provider: AsyncMock
    ):
        with pytest.raises(BadFormatError):
            await service.verify_relation(f"https://example.com/{TAGS_RAW}", TAPS_RAW, "Taps", "Tag")

        provider.retrieve_schema.assert_not_called()

    @pytest.mark.asyncio
    async def test_propagates_relation_mismatch(self, provider: AsyncMock):
        schemas = _schemas(TAPS_ID, TAPS_ID)
        provider.retrieve_schema.side_effect = lambda ref: schemas[ref]
        service = IntegrationService(provider, provider_host=HOST)

        with pytest.raises(WrongTargetError):
            await service.verify_relation(TAGS_RAW, TAPS_RAW, "Taps", "Tag")

    @pytest.mark.asyncio
    async def test_does_not_retry_provider_failure(self, provider: AsyncMock):
        provider.retrieve_schema.side_effect = SchemaProviderError(str(TAGS_ID), "HTTP 503")
        service = IntegrationService(provider, provider_host=HOST)

        with pytest.raises(SchemaProviderError):
            await service.verify_relation(TAGS_RAW, TAPS_RAW, "Taps", "Tag")

        assert provider.retrieve_schema.call_count == 1


class TestStartupCheck:
    @pytest.mark.asyncio
    async def test_skipped_without_token(self, service: IntegrationService, provider: AsyncMock):
        from core.config import Settings
        from main import verify_integration

        await verify_integration(service, Settings(notion_token=""))

        provider.retrieve_schema.assert_not_called()

    @pytest.mark.asyncio
    async def test_failure_aborts_startup(self, provider: AsyncMock):
        from core.config import Settings
        from main import verify_integration

        provider.retrieve_schema.side_effect = SchemaProviderError(str(TAGS_ID), "HTTP 401")
        service = IntegrationService(provider, provider_host=HOST)
        config = Settings(
            notion_token="secret",
            notion_tags_database=TAGS_RAW,
            notion_taps_database=TAPS_RAW,
        )

        with pytest.raises(SchemaProviderError):
            await verify_integration(service, config)
