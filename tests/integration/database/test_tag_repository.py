"""Integration tests for the SQLAlchemy tag repository."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.exceptions import TagAlreadyExistsError
from domain.entities.tag import Tag
from domain.identifiers.hex_identifier import HexIdentifier
from infrastructure.database.repositories.sqlalchemy_tag_repo import SQLAlchemyTagRepository

TAG_ID = HexIdentifier("055b88a23c1250")


@pytest.fixture
def repo(db_session: AsyncSession) -> SQLAlchemyTagRepository:
    return SQLAlchemyTagRepository(db_session)


class TestTagRepository:
    @pytest.mark.asyncio
    async def test_get_missing(self, repo: SQLAlchemyTagRepository):
        assert await repo.get(TAG_ID) is None

    @pytest.mark.asyncio
    async def test_create_and_get(self, repo: SQLAlchemyTagRepository):
        await repo.create(Tag(id=TAG_ID, target_url="https://example.com", access_count=3))

        tag = await repo.get(HexIdentifier("055B88A23C1250"))

        assert tag is not None
        assert isinstance(tag.id, HexIdentifier)
        assert tag.id == "055B88A23C1250"
        assert tag.access_count == 3
        assert tag.last_accessed is None

    @pytest.mark.asyncio
    async def test_record_access(self, repo: SQLAlchemyTagRepository, db_session: AsyncSession):
        await repo.create(Tag(id=TAG_ID, target_url="https://example.com", access_count=1))

        await repo.record_access(TAG_ID, 0x10)
        await repo.record_access(TAG_ID)
        db_session.expire_all()

        tag = await repo.get(TAG_ID)
        assert tag is not None
        assert tag.access_count == 3
        assert tag.last_seen_tap_count == 0x10
        assert tag.last_accessed is not None

    @pytest.mark.asyncio
    async def test_create_duplicate_raises_conflict(
        self, session_factory: async_sessionmaker[AsyncSession]
    ):
        async with session_factory() as first:
            await SQLAlchemyTagRepository(first).create(
                Tag(id=TAG_ID, target_url="https://example.com")
            )
            await first.commit()

        async with session_factory() as second:
            repo = SQLAlchemyTagRepository(second)
            with pytest.raises(TagAlreadyExistsError) as exc_info:
                await repo.create(Tag(id=TAG_ID, target_url="https://other.example.com"))

            assert exc_info.value.status_code == 409
            assert await repo.get(TAG_ID) is not None
