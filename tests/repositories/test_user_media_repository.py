"""Tests for the user and media repositories."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlmodel.ext.asyncio.session import AsyncSession

from journal.errors import DuplicateEntryError
from journal.models import MediaDB, Role, UserDB
from journal.repositories import MediaRepository, PageParams, UserRepository
from journal.schemas import MediaUpdate, ProfileUpdate


def make_media(
    name: str,
    size: int,
    uploaded_by: UserDB | None,
    mime: str = "image/png",
) -> MediaDB:
    return MediaDB(
        filename=f"uploads/1732790000000-abc123-{name}.png",
        original_filename=f"{name}.png",
        url=f"/media/uploads/1732790000000-abc123-{name}.png",
        mime_type=mime,
        size=size,
        uploaded_by=uploaded_by.id if uploaded_by else None,
    )


class TestUserRepository:
    """Tests for UserRepository."""

    @pytest.mark.asyncio
    async def test_email_is_normalised_and_unique(
        self,
        session: AsyncSession,
        author: UserDB,
    ) -> None:
        """Test case-insensitive lookup and duplicate rejection."""
        repo = UserRepository(session)
        found = await repo.get_by_email("  ADA@Example.com ")
        assert found is not None and found.id == author.id

        with pytest.raises(DuplicateEntryError, match="already registered"):
            await repo.create(name="Ada Again", email="Ada@example.com", password_hash="h")

    @pytest.mark.asyncio
    async def test_role_and_profile_updates(self, session: AsyncSession, author: UserDB) -> None:
        """Test changing role, name and avatar."""
        repo = UserRepository(session)
        promoted = await repo.update_role(author, Role.EDITOR)
        assert promoted.role == "editor"

        updated = await repo.update_profile(
            author,
            ProfileUpdate(name="  Ada King  ", image="/media/uploads/me.png"),
        )
        assert updated.name == "Ada King"
        assert updated.image == "/media/uploads/me.png"

        cleared = await repo.update_profile(author, ProfileUpdate(image=""))
        assert cleared.image is None
        assert cleared.name == "Ada King"

    @pytest.mark.asyncio
    async def test_first_user_lock_on_postgresql(self) -> None:
        """Test that the first-account check takes an advisory lock on PostgreSQL."""
        session = MagicMock()
        session.get_bind.return_value.dialect.name = "postgresql"
        session.execute = AsyncMock()

        await UserRepository(session).lock_first_user_check()

        statement = str(session.execute.await_args.args[0])
        assert "pg_advisory_xact_lock" in statement

    @pytest.mark.asyncio
    async def test_first_user_lock_is_skipped_on_sqlite(self, session: AsyncSession) -> None:
        """Test that the lock is a no-op on SQLite."""
        repo = UserRepository(session)
        await repo.lock_first_user_check()
        assert await repo.count() == 0

    @pytest.mark.asyncio
    async def test_list_users(self, session: AsyncSession, author: UserDB) -> None:
        """Test the paginated user listing."""
        repo = UserRepository(session)
        await repo.create(name="Grace", email="grace@example.com", password_hash="h")
        page = await repo.list_page(PageParams(1, 1))
        assert page.total == 2
        assert len(page.items) == 1
        assert page.has_next is True


class TestMediaRepository:
    """Tests for MediaRepository."""

    @pytest.mark.asyncio
    async def test_listing_with_uploader_name(
        self,
        session: AsyncSession,
        author: UserDB,
    ) -> None:
        """Test the uploader join, MIME prefix filter and search."""
        repo = MediaRepository(session)
        await repo.create(make_media("sunrise", 100, author))
        await repo.create(make_media("notes", 50, None, mime="application/pdf"))
        await repo.create(make_media("sunset", 200, author))

        page = await repo.list_with_uploader(PageParams(1, 20))
        assert page.total == 3
        names = {media.original_filename: uploader for media, uploader in page.items}
        assert names == {
            "sunset.png": "Ada Lovelace",
            "notes.png": None,
            "sunrise.png": "Ada Lovelace",
        }

        images = await repo.list_with_uploader(PageParams(1, 20), mime_prefix="image/")
        assert images.total == 2

        found = await repo.list_with_uploader(PageParams(1, 20), search="SUN")
        assert {media.original_filename for media, _ in found.items} == {
            "sunrise.png",
            "sunset.png",
        }

    @pytest.mark.asyncio
    async def test_storage_totals(self, session: AsyncSession, author: UserDB) -> None:
        """Test summed sizes overall and per uploader."""
        repo = MediaRepository(session)
        assert await repo.total_storage_used() == 0
        await repo.create(make_media("one", 1024, author))
        await repo.create(make_media("two", 2048, None))
        assert await repo.total_storage_used() == 3072
        assert await repo.storage_used_by(author.id) == 1024

    @pytest.mark.asyncio
    async def test_update_lookup_and_remove(self, session: AsyncSession, author: UserDB) -> None:
        """Test alt text edits, lookup by URL and deletion."""
        repo = MediaRepository(session)
        media = await repo.create(make_media("cover", 10, author))

        updated = await repo.update(media, MediaUpdate(alt_text="A cover", caption="Morning"))
        assert updated.alt_text == "A cover"
        assert updated.caption == "Morning"

        assert (await repo.get_by_url(media.url)).id == media.id
        await repo.remove(media)
        assert await repo.get_by_id(media.id) is None
