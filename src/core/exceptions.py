"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Identifier errors (400)
    INVALID_LENGTH = "INVALID_LENGTH"
    INVALID_CHARACTER = "INVALID_CHARACTER"
    MALFORMED_SLUG = "MALFORMED_SLUG"
    INVALID_TAP_COUNT = "INVALID_TAP_COUNT"
    MISSING_TARGET_URL = "MISSING_TARGET_URL"

    # External reference errors (400)
    BAD_FORMAT = "BAD_FORMAT"
    MISSING_ID = "MISSING_ID"
    INVALID_ID = "INVALID_ID"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Conflict errors (409)
    TAG_ALREADY_EXISTS = "TAG_ALREADY_EXISTS"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Integration schema errors (startup)
    MISSING_FIELD = "MISSING_FIELD"
    WRONG_FIELD_TYPE = "WRONG_FIELD_TYPE"
    WRONG_TARGET = "WRONG_TARGET"
    SCHEMA_PROVIDER_ERROR = "SCHEMA_PROVIDER_ERROR"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


# --- Tag identifiers ---


class HexIdentifierError(AppException):
    """Base class for malformed tag identifiers."""


class InvalidLengthError(HexIdentifierError):
    """Tag identifier does not have exactly 14 characters."""

    def __init__(self, actual_len: int) -> None:
        self.actual_len = actual_len
        super().__init__(
            error_code=ErrorCode.INVALID_LENGTH,
            message=f"Invalid length: expected 14 characters, got {actual_len}",
            status_code=400,
            details={"actual_len": actual_len},
        )


class InvalidCharacterError(HexIdentifierError):
    """Tag identifier contains a non-hex character."""

    def __init__(self, char: str) -> None:
        self.char = char
        super().__init__(
            error_code=ErrorCode.INVALID_CHARACTER,
            message=f"Invalid character: expected hex digit, found {char!r}",
            status_code=400,
            details={"char": char},
        )


class MalformedSlugError(AppException):
    """Routing slug does not match ``HEX14 ("x" HEX6)?``."""

    def __init__(self, slug: str) -> None:
        super().__init__(
            error_code=ErrorCode.MALFORMED_SLUG,
            message="Invalid tag ID format",
            status_code=400,
            details={"slug": slug},
        )


class InvalidTapCountError(AppException):
    """Tap count is not a 24-bit hex value."""

    def __init__(self, value: object) -> None:
        super().__init__(
            error_code=ErrorCode.INVALID_TAP_COUNT,
            message=f"Invalid tap count: {value!r}",
            status_code=400,
            details={"tap_count": str(value)},
        )


class MissingTargetUrlError(AppException):
    """Tag creation request carries no target URL."""

    def __init__(self) -> None:
        super().__init__(
            error_code=ErrorCode.MISSING_TARGET_URL,
            message="Target URL is missing",
            status_code=400,
        )


class TagAlreadyExistsError(AppException):
    """A tag with this identifier is already stored."""

    def __init__(self, tag_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.TAG_ALREADY_EXISTS,
            message=f"Tag already exists: {tag_id}",
            status_code=409,
            details={"tag_id": tag_id},
        )


# --- External references ---


class ExternalRefError(AppException):
    """Base class for malformed external database references."""


class BadFormatError(ExternalRefError):
    """Reference is a URL on a host other than the provider host."""

    def __init__(self, value: str, provider_host: str) -> None:
        super().__init__(
            error_code=ErrorCode.BAD_FORMAT,
            message=f"Expected a URL on {provider_host}, got {value!r}",
            status_code=400,
            details={"value": value, "provider_host": provider_host},
        )


class MissingIdError(ExternalRefError):
    """Reference URL has no path segment to read an identifier from."""

    def __init__(self, value: str) -> None:
        super().__init__(
            error_code=ErrorCode.MISSING_ID,
            message=f"No identifier found in {value!r}",
            status_code=400,
            details={"value": value},
        )


class InvalidIdError(ExternalRefError):
    """Reference does not contain a 32-character hex identifier."""

    def __init__(self, value: str) -> None:
        super().__init__(
            error_code=ErrorCode.INVALID_ID,
            message=f"Invalid identifier: {value!r}",
            status_code=400,
            details={"value": value},
        )


# --- Integration schema ---


class RelationError(AppException):
    """Base class for relation misconfigurations found at startup."""


class MissingFieldError(RelationError):
    """Relation field is not present in the database schema."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            error_code=ErrorCode.MISSING_FIELD,
            message=f"Missing field: {name}",
            status_code=500,
            details={"field": name},
        )


class WrongFieldTypeError(RelationError):
    """Field exists but is not a relation."""

    def __init__(self, name: str, kind: str | None = None) -> None:
        self.name = name
        super().__init__(
            error_code=ErrorCode.WRONG_FIELD_TYPE,
            message=f"Field {name!r} is not a relation (found {kind!r})",
            status_code=500,
            details={"field": name, "kind": kind},
        )


class WrongTargetError(RelationError):
    """Relation points at a different database than expected."""

    def __init__(self, name: str, expected: str, actual: str | None) -> None:
        self.name = name
        self.expected = expected
        self.actual = actual
        super().__init__(
            error_code=ErrorCode.WRONG_TARGET,
            message=f"Relation {name!r} targets {actual}, expected {expected}",
            status_code=500,
            details={"field": name, "expected": expected, "actual": actual},
        )


class SchemaProviderError(AppException):
    """The schema provider could not return a database schema."""

    def __init__(self, database_id: str, reason: str) -> None:
        super().__init__(
            error_code=ErrorCode.SCHEMA_PROVIDER_ERROR,
            message=f"Failed to retrieve schema for {database_id}: {reason}",
            status_code=502,
            details={"database_id": database_id},
        )
