"""SQLAlchemy implementation of Tag repository."""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import TagAlreadyExistsError
from domain.entities.tag import Tag
from domain.identifiers.hex_identifier import HexIdentifier
from infrastructure.database.models import TagModel


class SQLAlchemyTagRepository:
    """SQLAlchemy implementation of ITagRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: HexIdentifier) -> Tag | None:
        """Get a tag by ID."""
        stmt = select(TagModel).where(TagModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def create(self, tag: Tag) -> Tag:
        """Create a new tag. A concurrent insert of the same ID raises 409."""
        model = self._to_model(tag)
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as e:
            await self._session.rollback()
            raise TagAlreadyExistsError(tag.id.render()) from e
        await self._session.refresh(model)
        return self._to_entity(model)

    async def record_access(
        self, id: HexIdentifier, tap_count: Optional[int] = None
    ) -> None:
        """Increment the access counter in place."""
        values: dict = {
            "access_count": TagModel.access_count + 1,
            "last_accessed": datetime.now(timezone.utc),
        }
        if tap_count is not None:
            values["last_seen_tap_count"] = tap_count

        stmt = (
            update(TagModel)
            .where(TagModel.id == id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        await self._session.execute(stmt)
        await self._session.flush()

    def _to_entity(self, model: TagModel) -> Tag:
        """Convert ORM model to domain entity."""
        return Tag(
            id=model.id,
            target_url=model.target_url,
            access_count=model.access_count,
            last_seen_tap_count=model.last_seen_tap_count,
            last_accessed=model.last_accessed,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Tag) -> TagModel:
        """Convert domain entity to ORM model."""
        return TagModel(
            id=entity.id,
            target_url=entity.target_url,
            access_count=entity.access_count,
            last_seen_tap_count=entity.last_seen_tap_count,
            last_accessed=entity.last_accessed,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
