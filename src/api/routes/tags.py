"""Tag API routes.

    GET  /tag/055B88A23C1250
    GET  /tag/055B88A23C1250x00000F
    GET  /tag/create?id=055B88A23C1250&tap_count=00000F
    POST /tag/create?id=055B88A23C1250&tap_count=00000F  {"target_url": "https://example.com"}
    POST /tag/create?id=055B88A23C1250  target_url=https://example.com  (form-encoded)
"""

from typing import Any

import orjson
from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import RedirectResponse
from pydantic import ValidationError

from api.dependencies import get_tag_service
from api.schemas.common import ErrorResponse
from api.schemas.tag import (
    TARGET_URL_MAX_LENGTH,
    TARGET_URL_PATTERN,
    TagCreate,
    TagDetailResponse,
    TagDraftResponse,
    TagResponse,
)
from core.rate_limit import limiter
from domain.services.tag_service import TagService

router = APIRouter(prefix="/tag", tags=["tags"])

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")

_CREATE_BODY_SCHEMA = TagCreate.model_json_schema()


async def read_tag_create(request: Request) -> TagCreate | None:
    """Read the optional creation body, either JSON or form-encoded.

    Empty form fields are treated as absent so they fall back to the query.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        payload: Any = {key: value for key, value in form.items() if value}
    else:
        raw = await request.body()
        if not raw:
            return None
        try:
            payload = orjson.loads(raw)
        except orjson.JSONDecodeError as e:
            raise RequestValidationError(
                [{"type": "json_invalid", "loc": ("body",), "msg": "JSON decode error"}]
            ) from e
        if payload is None:
            return None

    try:
        return TagCreate.model_validate(payload)
    except ValidationError as e:
        raise RequestValidationError(
            [{**error, "loc": ("body", *error["loc"])} for error in e.errors(include_url=False)]
        ) from e


@router.get(
    "/create",
    response_model=TagDraftResponse,
    summary="Prepare tag creation",
    responses={
        200: {"description": "Tag can be created"},
        400: {"model": ErrorResponse, "description": "Invalid tag ID or tap count"},
        409: {"model": ErrorResponse, "description": "Tag already exists"},
    },
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def create_tag_page(
    request: Request,
    tag_id: str = Query(..., alias="id"),
    tap_count: str | None = Query(None),
    target_url: str | None = Query(
        None, max_length=TARGET_URL_MAX_LENGTH, pattern=TARGET_URL_PATTERN
    ),
    service: TagService = Depends(get_tag_service),
) -> TagDraftResponse:
    """Validate a creation link and echo the normalized values back."""
    draft = await service.prepare_creation(tag_id, tap_count, target_url)
    return TagDraftResponse.from_draft(draft)


@router.post(
    "/create",
    response_model=TagDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a tag",
    responses={
        201: {"description": "Tag created successfully"},
        400: {
            "model": ErrorResponse,
            "description": "Invalid tag ID, tap count or missing target URL",
        },
        409: {"model": ErrorResponse, "description": "Tag already exists"},
    },
    openapi_extra={
        "requestBody": {
            "required": False,
            "content": {
                content_type: {"schema": _CREATE_BODY_SCHEMA}
                for content_type in ("application/json", FORM_CONTENT_TYPES[0])
            },
        }
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def create_tag(
    request: Request,
    tag_id: str = Query(..., alias="id"),
    tap_count: str | None = Query(None),
    target_url: str | None = Query(
        None, max_length=TARGET_URL_MAX_LENGTH, pattern=TARGET_URL_PATTERN
    ),
    body: TagCreate | None = Depends(read_tag_create),
    service: TagService = Depends(get_tag_service),
) -> TagDetailResponse:
    """Create a tag. Tap count defaults to 1 when neither body nor query has one."""
    if body is not None:
        tap_count = body.tap_count or tap_count
        target_url = body.target_url or target_url

    tag = await service.create(tag_id, target_url, tap_count)
    return TagDetailResponse(data=TagResponse.from_entity(tag))


@router.get(
    "/{slug}",
    status_code=status.HTTP_308_PERMANENT_REDIRECT,
    summary="Resolve a tag",
    responses={
        307: {"description": "Unknown tag, redirect to creation"},
        308: {"description": "Redirect to the tag's target URL"},
        400: {"model": ErrorResponse, "description": "Malformed slug"},
    },
)
@limiter.limit("120/minute")  # type: ignore[untyped-decorator]
async def get_tag_by_slug(
    request: Request,
    slug: str,
    service: TagService = Depends(get_tag_service),
) -> RedirectResponse:
    """Redirect a scanned tag to its target, or to creation if unknown."""
    redirect = await service.resolve(slug)
    return RedirectResponse(
        url=redirect.url,
        status_code=(
            status.HTTP_308_PERMANENT_REDIRECT
            if redirect.permanent
            else status.HTTP_307_TEMPORARY_REDIRECT
        ),
    )
