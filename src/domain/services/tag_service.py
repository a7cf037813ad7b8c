"""Tag service layer with business logic."""

from typing import Callable, Optional

import structlog

from core.exceptions import MissingTargetUrlError, TagAlreadyExistsError
from domain.codecs.slug import build_creation_redirect, decode_slug, parse_tap_count
from domain.entities.tag import Tag, TagDraft, TagRedirect
from domain.identifiers.hex_identifier import HexIdentifier
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()

# Tap count assumed for a freshly created tag whose link carried none.
DEFAULT_CREATION_TAP_COUNT = 1


class TagService:
    """Service layer for Tag business logic."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        creation_path: str = "/tag/create",
    ) -> None:
        self._uow_factory = uow_factory
        self._creation_path = creation_path

    async def resolve(self, slug: str) -> TagRedirect:
        """Decide where a scanned slug redirects to.

        Known tags redirect permanently to their target URL. Unknown tags
        redirect temporarily to the creation flow, carrying the identifier
        and the tap count (when the slug had one).
        """
        routing = decode_slug(slug)

        async with self._uow_factory() as uow:
            tag = await uow.tags.get(routing.id)
            if tag is None:
                logger.info(
                    "tag_not_found",
                    tag_id=str(routing.id),
                    tap_count=routing.tap_count,
                )
                return TagRedirect(
                    url=build_creation_redirect(
                        routing.id, routing.tap_count, self._creation_path
                    ),
                    permanent=False,
                )

            await uow.tags.record_access(routing.id, routing.tap_count)
            await uow.commit()

        logger.debug("tag_found", tag_id=str(tag.id), target_url=tag.target_url)
        return TagRedirect(url=tag.target_url, permanent=True)

    async def prepare_creation(
        self,
        tag_id: str,
        tap_count: Optional[str] = None,
        target_url: Optional[str] = None,
    ) -> TagDraft:
        """Validate a creation link before showing the creation prompt."""
        id = HexIdentifier.parse(tag_id)
        count = parse_tap_count(tap_count) if tap_count else None

        async with self._uow_factory() as uow:
            if await uow.tags.get(id) is not None:
                raise TagAlreadyExistsError(str(id))

        return TagDraft(id=id, tap_count=count, target_url=target_url)

    async def create(
        self,
        tag_id: str,
        target_url: Optional[str],
        tap_count: Optional[str] = None,
    ) -> Tag:
        """Store a new tag.

        The tap count becomes the tag's initial access count and defaults to
        one when the creation link carried none.
        """
        id = HexIdentifier.parse(tag_id)
        count = parse_tap_count(tap_count) if tap_count else DEFAULT_CREATION_TAP_COUNT

        if not target_url:
            raise MissingTargetUrlError()

        async with self._uow_factory() as uow:
            if await uow.tags.get(id) is not None:
                raise TagAlreadyExistsError(str(id))

            logger.info(
                "tag_creating",
                tag_id=str(id),
                tap_count=count,
                target_url=target_url,
            )
            created = await uow.tags.create(
                Tag(id=id, target_url=target_url, access_count=count)
            )
            await uow.commit()
            return created
