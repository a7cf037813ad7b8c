"""Pydantic schemas for Tag API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from domain.codecs.slug import format_tap_count
from domain.entities.tag import Tag, TagDraft

TARGET_URL_PATTERN = r"^https?://"
TARGET_URL_MAX_LENGTH = 2048


class TagCreate(BaseModel):
    """Schema for creating a Tag. Values override the query string."""

    target_url: str | None = Field(
        None, min_length=1, max_length=TARGET_URL_MAX_LENGTH, pattern=TARGET_URL_PATTERN
    )
    tap_count: str | None = Field(None, description="Hex tap count, e.g. 00000F")


class TagResponse(BaseModel):
    """Schema for Tag response."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "055B88A23C1250",
                "target_url": "https://example.com",
                "access_count": 15,
                "last_seen_tap_count": None,
                "last_accessed": None,
                "created_at": "2026-01-28T10:00:00Z",
            }
        },
    )

    id: str
    target_url: str
    access_count: int
    last_seen_tap_count: int | None = None
    last_accessed: datetime | None = None
    created_at: datetime

    @classmethod
    def from_entity(cls, tag: Tag) -> "TagResponse":
        return cls(
            id=str(tag.id),
            target_url=tag.target_url,
            access_count=tag.access_count,
            last_seen_tap_count=tag.last_seen_tap_count,
            last_accessed=tag.last_accessed,
            created_at=tag.created_at,
        )


class TagDetailResponse(BaseModel):
    """Schema for single Tag."""

    data: TagResponse


class TagDraftResponse(BaseModel):
    """Schema for the creation prompt of an unknown tag."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "055B88A23C1250",
                "tap_count": "00000F",
                "target_url": None,
            }
        },
    )

    id: str
    tap_count: str | None = None
    target_url: str | None = None

    @classmethod
    def from_draft(cls, draft: TagDraft) -> "TagDraftResponse":
        return cls(
            id=str(draft.id),
            tap_count=format_tap_count(draft.tap_count) if draft.tap_count is not None else None,
            target_url=draft.target_url,
        )
