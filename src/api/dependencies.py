"""Dependency injection factories."""

from functools import lru_cache
from typing import Callable

from core.config import settings
from domain.services.integration_service import IntegrationService
from domain.services.tag_service import TagService
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
from infrastructure.notion.client import NotionSchemaProvider


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_tag_service() -> TagService:
    """Get Tag service instance."""
    return TagService(get_uow_factory(), creation_path=settings.creation_path)


@lru_cache
def get_integration_service() -> IntegrationService:
    """Get Integration service instance backed by Notion."""
    return IntegrationService(NotionSchemaProvider(), provider_host=settings.notion_host)
