"""External database reference (Notion page/database IDs)."""

from typing import Any
from urllib.parse import urlsplit
from uuid import UUID

from core.exceptions import BadFormatError, InvalidIdError, MissingIdError
from domain.identifiers.hex_identifier import HEX_DIGITS

RAW_LENGTH = 32
HYPHEN_POSITIONS = (8, 13, 18, 23)


def _as_uuid(candidate: str) -> UUID | None:
    """Read a simple (32 hex) or hyphenated (8-4-4-4-12) UUID, any case."""
    if len(candidate) == RAW_LENGTH + len(HYPHEN_POSITIONS):
        if any(candidate[pos] != "-" for pos in HYPHEN_POSITIONS):
            return None
        candidate = candidate.replace("-", "")
    if len(candidate) != RAW_LENGTH:
        return None
    if not all(char in HEX_DIGITS for char in candidate):
        return None
    return UUID(hex=candidate)


def _extract(segment: str) -> UUID | None:
    uuid = _as_uuid(segment)
    if uuid is not None:
        return uuid
    # "Some-Page-Title-<id>" style segments
    stripped = segment.replace("-", "")
    if len(stripped) > RAW_LENGTH:
        return _as_uuid(stripped[-RAW_LENGTH:])
    return None


class ExternalRef:
    """Canonical reference to an external database or page.

    Accepts a bare 32-character hex ID, a hyphenated UUID, or a URL on the
    provider host whose last path segment is (or ends with) such an ID.
    Renders as lowercase ``8-4-4-4-12``.
    """

    __slots__ = ("_uuid",)

    _uuid: UUID

    def __init__(self, value: str, provider_host: str) -> None:
        object.__setattr__(self, "_uuid", self._read(value, provider_host))

    @classmethod
    def parse(cls, value: str, provider_host: str) -> "ExternalRef":
        """Extract and normalize the identifier carried by ``value``."""
        return cls(value, provider_host)

    @staticmethod
    def _read(value: str, provider_host: str) -> UUID:
        segment = value
        try:
            parts = urlsplit(value)
        except ValueError as e:
            raise BadFormatError(value, provider_host) from e
        if parts.scheme:
            if parts.hostname != provider_host.lower():
                raise BadFormatError(value, provider_host)
            segments = [s for s in parts.path.split("/") if s]
            if not segments:
                raise MissingIdError(value)
            segment = segments[-1]

        uuid = _extract(segment)
        if uuid is None:
            raise InvalidIdError(value)
        return uuid

    @property
    def raw(self) -> str:
        """The 32-character form without hyphens, as the provider stores it."""
        return self._uuid.hex

    def render(self) -> str:
        """Return the canonical lowercase hyphenated form."""
        return str(self._uuid)

    def __str__(self) -> str:
        return str(self._uuid)

    def __repr__(self) -> str:
        return f"ExternalRef({str(self._uuid)!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ExternalRef):
            return self._uuid == other._uuid
        return NotImplemented

    def __hash__(self) -> int:
        return hash(str(self._uuid))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")
