"""Unit tests for the routing slug codec."""

import pytest

from core.exceptions import InvalidTapCountError, MalformedSlugError
from domain.codecs.slug import (
    RoutingSlug,
    build_creation_redirect,
    decode_slug,
    encode_slug,
    format_tap_count,
    parse_tap_count,
)
from domain.identifiers.hex_identifier import HexIdentifier

ID = "055B88A23C1250"


class TestDecode:
    def test_identifier_only(self):
        routing = decode_slug(ID)

        assert routing == RoutingSlug(id=HexIdentifier(ID), tap_count=None)

    def test_identifier_with_tap_count(self):
        routing = decode_slug(f"{ID}x00000F")

        assert routing.id == ID
        assert routing.tap_count == 15

    def test_absent_tap_count_is_not_zero(self):
        assert decode_slug(ID).tap_count is None

    @pytest.mark.parametrize(
        "slug",
        [
            "",
            ID[:-1],
            ID + "0",
            ID.lower(),
            "055b88A23C1250",
            f"{ID}x",
            f"{ID}x00000",
            f"{ID}x0000000",
            f"{ID}x00000f",
            f"{ID}X00000F",
            f"{ID}-00000F",
            f"{ID}x00000F ",
            f" {ID}",
            f"{ID}x00000Fx",
            f"{ID}x0000G0",
            "G55B88A23C1250",
        ],
    )
    def test_rejects_malformed(self, slug: str):
        with pytest.raises(MalformedSlugError):
            decode_slug(slug)


class TestEncode:
    def test_identifier_only(self):
        assert encode_slug(HexIdentifier(ID)) == ID

    def test_pads_tap_count(self):
        assert encode_slug(HexIdentifier(ID), 15) == f"{ID}x00000F"

    @pytest.mark.parametrize("tap_count", [None, 0, 1, 0xFF, 0xABCDE, 0xFFFFFF])
    def test_round_trips(self, tap_count: int | None):
        id = HexIdentifier("abcdef01234567")

        assert decode_slug(encode_slug(id, tap_count)) == RoutingSlug(id, tap_count)

    @pytest.mark.parametrize("tap_count", [-1, 0x1000000])
    def test_rejects_out_of_range_tap_count(self, tap_count: int):
        with pytest.raises(InvalidTapCountError):
            encode_slug(HexIdentifier(ID), tap_count)


class TestTapCount:
    def test_formats_six_uppercase_digits(self):
        assert format_tap_count(0xabc) == "000ABC"

    @pytest.mark.parametrize(("text", "expected"), [("F", 15), ("00000f", 15), ("FFFFFF", 0xFFFFFF)])
    def test_parses_compact_hex(self, text: str, expected: int):
        assert parse_tap_count(text) == expected

    @pytest.mark.parametrize("text", ["", "1000000", "0x10", "G", "1_0", " 1"])
    def test_rejects_invalid(self, text: str):
        with pytest.raises(InvalidTapCountError):
            parse_tap_count(text)


class TestCreationRedirect:
    def test_without_tap_count(self):
        assert build_creation_redirect(HexIdentifier(ID)) == f"/tag/create?id={ID}"

    def test_with_tap_count(self):
        url = build_creation_redirect(HexIdentifier(ID), 15)

        assert url == f"/tag/create?id={ID}&tap_count=00000F"

    def test_custom_path(self):
        url = build_creation_redirect(HexIdentifier(ID), 0, creation_path="/new")

        assert url == f"/new?id={ID}&tap_count=000000"
