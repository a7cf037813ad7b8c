"""Tag repository protocol."""

from typing import Optional, Protocol

from domain.entities.tag import Tag
from domain.identifiers.hex_identifier import HexIdentifier


class ITagRepository(Protocol):
    """Repository interface for Tag entities."""

    async def get(self, id: HexIdentifier) -> Tag | None:
        """Get a tag by ID."""
        ...

    async def create(self, tag: Tag) -> Tag:
        """Create a new tag."""
        ...

    async def record_access(
        self, id: HexIdentifier, tap_count: Optional[int] = None
    ) -> None:
        """Count a lookup and remember the tap count it carried."""
        ...
