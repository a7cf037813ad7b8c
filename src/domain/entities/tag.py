"""Tag domain entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from domain.identifiers.hex_identifier import HexIdentifier


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Tag:
    """A physical tag and the URL it redirects to."""

    id: HexIdentifier
    target_url: str
    access_count: int = 0
    last_seen_tap_count: Optional[int] = None
    last_accessed: Optional[datetime] = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)


@dataclass(frozen=True, slots=True)
class TagDraft:
    """Read-only value object: a tag about to be created."""

    id: HexIdentifier
    tap_count: Optional[int] = None
    target_url: Optional[str] = None


@dataclass(frozen=True, slots=True)
class TagRedirect:
    """Where a slug lookup sends the client."""

    url: str
    permanent: bool
