"""Routing slug codec.

A tag's URL path carries its identifier and, optionally, the tap count the
tag reported when it was scanned::

    055B88A23C1250           identifier only
    055B88A23C1250x00000F    identifier + tap count 15

Both parts are uppercase hex. Decoding is a fixed-width scan over the whole
string; anything that does not fit the layout above is rejected before any
lookup happens.
"""

from dataclasses import dataclass
from urllib.parse import urlencode

from core.exceptions import InvalidTapCountError, MalformedSlugError
from domain.identifiers.hex_identifier import HEX_DIGITS, HEX_IDENTIFIER_LENGTH, HexIdentifier

TAP_COUNT_DIGITS = 6
TAP_COUNT_MAX = 0xFFFFFF
SEPARATOR = "x"

_UPPER_HEX = frozenset("0123456789ABCDEF")
_SLUG_WITH_TAP_COUNT = HEX_IDENTIFIER_LENGTH + len(SEPARATOR) + TAP_COUNT_DIGITS


@dataclass(frozen=True, slots=True)
class RoutingSlug:
    """A decoded slug: tag identifier plus the optional tap count."""

    id: HexIdentifier
    tap_count: int | None = None


def _is_upper_hex(text: str) -> bool:
    return all(char in _UPPER_HEX for char in text)


def decode_slug(slug: str) -> RoutingSlug:
    """Split ``slug`` into identifier and tap count.

    Raises:
        MalformedSlugError: if ``slug`` is not ``HEX14`` or ``HEX14 "x" HEX6``.
    """
    if len(slug) not in (HEX_IDENTIFIER_LENGTH, _SLUG_WITH_TAP_COUNT):
        raise MalformedSlugError(slug)

    id_part = slug[:HEX_IDENTIFIER_LENGTH]
    if not _is_upper_hex(id_part):
        raise MalformedSlugError(slug)

    tap_count = None
    if len(slug) == _SLUG_WITH_TAP_COUNT:
        if slug[HEX_IDENTIFIER_LENGTH] != SEPARATOR:
            raise MalformedSlugError(slug)
        tap_part = slug[HEX_IDENTIFIER_LENGTH + len(SEPARATOR):]
        if not _is_upper_hex(tap_part):
            raise MalformedSlugError(slug)
        tap_count = int(tap_part, 16)

    return RoutingSlug(id=HexIdentifier(id_part), tap_count=tap_count)


def format_tap_count(tap_count: int) -> str:
    """Render a tap count as exactly six uppercase hex digits."""
    if isinstance(tap_count, bool) or not 0 <= tap_count <= TAP_COUNT_MAX:
        raise InvalidTapCountError(tap_count)
    return f"{tap_count:0{TAP_COUNT_DIGITS}X}"


def parse_tap_count(text: str) -> int:
    """Read the compact hex tap count used in creation links.

    Accepts one to six hex digits in either case (``F``, ``00000f``).
    """
    if not 1 <= len(text) <= TAP_COUNT_DIGITS or not all(c in HEX_DIGITS for c in text):
        raise InvalidTapCountError(text)
    return int(text, 16)


def encode_slug(id: HexIdentifier, tap_count: int | None = None) -> str:
    """Inverse of :func:`decode_slug`."""
    if tap_count is None:
        return id.render()
    return f"{id.render()}{SEPARATOR}{format_tap_count(tap_count)}"


def build_creation_redirect(
    id: HexIdentifier,
    tap_count: int | None = None,
    creation_path: str = "/tag/create",
) -> str:
    """Build the creation-flow URL for a tag that is not stored yet."""
    params = {"id": id.render()}
    if tap_count is not None:
        params["tap_count"] = format_tap_count(tap_count)
    return f"{creation_path}?{urlencode(params)}"
