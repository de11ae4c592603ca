"""Site settings repository: the lazily created singleton row."""

from datetime import UTC, datetime

from sqlalchemy import Insert
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError

from journal.errors.database import DatabaseError
from journal.models.site_settings import SETTINGS_ID, SiteSettingsDB
from journal.monitoring import get_logger
from journal.repositories.base import BaseRepository
from journal.schemas.settings import SiteSettingsUpdate

logger = get_logger(__name__)

# Columns that cannot hold NULL; an explicit null leaves them unchanged.
NON_NULLABLE_FIELDS = frozenset({"site_name", "show_newsletter", "allow_registration"})


class SiteSettingsRepository(BaseRepository[SiteSettingsDB]):
    """
    Repository for the site settings singleton.

    The row is created on first read with default values. Creation is
    idempotent under concurrency: racing readers all end up with the same
    single row.
    """

    model = SiteSettingsDB

    def _insert_ignoring_conflict(self, values: dict) -> Insert | None:
        dialect = self.session.get_bind().dialect.name
        if dialect == "postgresql":
            return pg_insert(SiteSettingsDB).values(**values).on_conflict_do_nothing(
                index_elements=["id"],
            )
        if dialect == "sqlite":
            return sqlite_insert(SiteSettingsDB).values(**values).on_conflict_do_nothing(
                index_elements=["id"],
            )
        return None

    async def _create_default(self) -> None:
        values = SiteSettingsDB(id=SETTINGS_ID).model_dump()
        statement = self._insert_ignoring_conflict(values)
        if statement is not None:
            await self.session.execute(statement)
            return
        try:
            async with self.session.begin_nested():
                self.session.add(SiteSettingsDB(**values))
        except IntegrityError:
            logger.debug("Site settings created concurrently")

    async def get_settings(self) -> SiteSettingsDB:
        """
        Return the settings row, creating it with defaults if missing.

        Returns:
            SiteSettingsDB: The singleton row

        Raises:
            DatabaseError: If the row is still missing after creation
        """
        settings = await self.get_by_id(SETTINGS_ID)
        if settings is not None:
            return settings

        await self._create_default()
        settings = await self.get_by_id(SETTINGS_ID)
        if settings is None:
            raise DatabaseError(detail="Failed to initialise site settings")
        logger.info("Site settings initialised with defaults")
        return settings

    async def update_settings(self, data: SiteSettingsUpdate) -> SiteSettingsDB:
        """
        Apply a partial update, creating the row first if needed.

        Args:
            data: Fields present in the request

        Returns:
            SiteSettingsDB: Updated settings
        """
        settings = await self.get_settings()
        changes = {
            key: value
            for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None or key not in NON_NULLABLE_FIELDS
        }
        for key, value in changes.items():
            setattr(settings, key, value)
        settings.updated_at = datetime.now(tz=UTC)

        settings = await self._add_and_refresh(settings)
        logger.info("Site settings updated", fields=sorted(changes))
        return settings
