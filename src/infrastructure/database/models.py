"""SQLAlchemy ORM models."""

from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import CHAR, DateTime, Integer, Text
from sqlalchemy.engine import Dialect
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator

from domain.identifiers.hex_identifier import HexIdentifier


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class HexIdentifierType(TypeDecorator[HexIdentifier]):
    """Stores a HexIdentifier as ``char(14)``."""

    impl = CHAR(14)
    cache_ok = True

    def process_bind_param(self, value: Any, dialect: Dialect) -> Optional[str]:
        if value is None:
            return None
        if not isinstance(value, HexIdentifier):
            value = HexIdentifier.parse(value)
        return value.render()

    def process_result_value(self, value: Optional[str], dialect: Dialect) -> Optional[HexIdentifier]:
        if value is None:
            return None
        return HexIdentifier.parse(value)


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class TagModel(Base):
    """Stored tag: where a scanned tag redirects to and how often it was read."""

    __tablename__ = "twag_tags"

    id: Mapped[HexIdentifier] = mapped_column(HexIdentifierType(), primary_key=True)
    target_url: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        onupdate=_utcnow,
    )
    last_accessed: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    access_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    last_seen_tap_count: Mapped[int | None] = mapped_column(Integer)
