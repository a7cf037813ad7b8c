"""Fixed-length hexadecimal tag identifier."""

from typing import Any

from core.exceptions import InvalidCharacterError, InvalidLengthError

HEX_IDENTIFIER_LENGTH = 14
HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


class HexIdentifier:
    """A 14-character hexadecimal tag identifier, stored uppercase.

    Instances are only created through validation, so every instance holds
    exactly 14 ASCII hex digits in canonical (uppercase) form.

    Comparison against a plain ``str`` is case-sensitive against the
    canonical value: ``HexIdentifier("055b88a23c1250") == "055B88A23C1250"``
    holds, the lowercase literal does not.
    """

    __slots__ = ("_value",)

    _value: str

    def __init__(self, value: str) -> None:
        if len(value) != HEX_IDENTIFIER_LENGTH:
            raise InvalidLengthError(len(value))
        for char in value:
            if char not in HEX_DIGITS:
                raise InvalidCharacterError(char)
        object.__setattr__(self, "_value", value.upper())

    @classmethod
    def parse(cls, value: str) -> "HexIdentifier":
        """Validate and normalize ``value``."""
        return cls(value)

    def render(self) -> str:
        """Return the canonical uppercase form."""
        return self._value

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"HexIdentifier({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, HexIdentifier):
            return self._value == other._value
        if isinstance(other, str):
            return self._value == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self) -> tuple[type["HexIdentifier"], tuple[str]]:
        return (type(self), (self._value,))
