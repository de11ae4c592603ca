"""Media library repository."""

from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import func, or_, select

from journal.models.media import MediaDB
from journal.models.user import UserDB
from journal.monitoring import get_logger
from journal.repositories.base import BaseRepository, Page, PageParams
from journal.schemas.media import MediaUpdate

logger = get_logger(__name__)


class MediaRepository(BaseRepository[MediaDB]):
    """Repository for uploaded media records."""

    model = MediaDB

    async def create(self, media: MediaDB) -> MediaDB:
        media = await self._add_and_refresh(media)
        logger.info(
            "Media recorded",
            media_id=str(media.id),
            key=media.filename,
            size=media.size,
        )
        return media

    async def list_with_uploader(
        self,
        params: PageParams,
        mime_prefix: str | None = None,
        search: str | None = None,
    ) -> Page[tuple[MediaDB, str | None]]:
        """
        Media newest first, each paired with the uploader's display name.

        Args:
            params: Page number and size
            mime_prefix: Only include MIME types starting with this, e.g. ``image/``
            search: Case-insensitive match on original filename or alt text

        Returns:
            Page: ``(media, uploader_name)`` pairs; the name is None when the
            uploader no longer exists
        """
        statement = select(MediaDB, UserDB.name).outerjoin(
            UserDB,
            UserDB.id == MediaDB.uploaded_by,
        )
        if mime_prefix:
            statement = statement.where(MediaDB.mime_type.startswith(mime_prefix, autoescape=True))
        if search := (search or "").strip():
            statement = statement.where(
                or_(
                    MediaDB.original_filename.icontains(search, autoescape=True),
                    MediaDB.alt_text.icontains(search, autoescape=True),
                ),
            )
        statement = statement.order_by(MediaDB.created_at.desc(), MediaDB.id.desc())

        rows, total = await self._paginate(statement, params, scalars=False)
        items = [(media, name) for media, name in rows]
        return Page(items=items, total=total, page=params.page, limit=params.limit)

    async def get_by_url(self, url: str) -> MediaDB | None:
        result = await self.session.execute(select(MediaDB).where(MediaDB.url == url).limit(1))
        return result.scalar_one_or_none()

    async def update(self, media: MediaDB, data: MediaUpdate) -> MediaDB:
        """
        Update alt text and caption.

        Args:
            media: Media record
            data: Fields to change

        Returns:
            MediaDB: Updated record
        """
        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(media, key, value)
        media.updated_at = datetime.now(tz=UTC)
        return await self._add_and_refresh(media)

    async def remove(self, media: MediaDB) -> None:
        await self.session.delete(media)
        await self.session.flush()
        logger.info("Media record deleted", media_id=str(media.id), key=media.filename)

    async def total_storage_used(self) -> int:
        """Sum of all media sizes in bytes."""
        result = await self.session.execute(select(func.coalesce(func.sum(MediaDB.size), 0)))
        return int(result.scalar() or 0)

    async def storage_used_by(self, user_id: UUID) -> int:
        """Sum of the sizes of media uploaded by ``user_id`` in bytes."""
        result = await self.session.execute(
            select(func.coalesce(func.sum(MediaDB.size), 0)).where(
                MediaDB.uploaded_by == user_id,
            ),
        )
        return int(result.scalar() or 0)
