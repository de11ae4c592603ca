"""User repository."""

from datetime import UTC, datetime

from sqlalchemy import func, select

from journal.errors.database import DuplicateEntryError
from journal.models.user import Role, UserDB
from journal.monitoring import get_logger
from journal.repositories.base import BaseRepository, Page, PageParams
from journal.schemas.user import ProfileUpdate

logger = get_logger(__name__)

FIRST_USER_LOCK_KEY = 7_420_173_001


class UserRepository(BaseRepository[UserDB]):
    """Repository for User database operations."""

    model = UserDB

    async def get_by_email(self, email: str) -> UserDB | None:
        """
        Get user by email address (case-insensitive).

        Args:
            email: Email address

        Returns:
            UserDB | None: User if found, None otherwise
        """
        result = await self.session.execute(
            select(UserDB).where(UserDB.email == email.strip().lower()),
        )
        return result.scalar_one_or_none()

    async def create(
        self,
        name: str,
        email: str,
        password_hash: str,
        role: Role = Role.AUTHOR,
    ) -> UserDB:
        """
        Create a new user.

        Args:
            name: Display name
            email: Email address, stored lower-cased
            password_hash: Already hashed password
            role: Initial role

        Returns:
            UserDB: Created user

        Raises:
            DuplicateEntryError: If the email is taken
        """
        email = email.strip().lower()
        if await self._check_exists_by_field("email", email):
            mssg = f"Email '{email}' is already registered"
            raise DuplicateEntryError(mssg)

        user = UserDB(
            name=name.strip(),
            email=email,
            password_hash=password_hash,
            role=role.value,
        )
        user = await self._add_and_refresh(user)
        logger.info("User created", user_id=str(user.id), role=user.role)
        return user

    async def lock_first_user_check(self) -> None:
        """
        Serialize the first-account role decision until the transaction ends.

        On PostgreSQL this takes a transaction-scoped advisory lock, so a
        concurrent registration waits until this one commits and then sees
        its row. Other backends are not locked; SQLite is only used for
        development and tests.
        """
        if self.session.get_bind().dialect.name == "postgresql":
            await self.session.execute(select(func.pg_advisory_xact_lock(FIRST_USER_LOCK_KEY)))

    async def list_page(self, params: PageParams) -> Page[UserDB]:
        """All users, newest first."""
        statement = select(UserDB).order_by(UserDB.created_at.desc(), UserDB.id.desc())
        items, total = await self._paginate(statement, params)
        return Page(items=items, total=total, page=params.page, limit=params.limit)

    async def update_role(self, user: UserDB, role: Role) -> UserDB:
        previous = user.role
        user.role = role.value
        user.updated_at = datetime.now(tz=UTC)
        user = await self._add_and_refresh(user)
        logger.info("User role changed", user_id=str(user.id), previous=previous, role=user.role)
        return user

    async def update_profile(self, user: UserDB, data: ProfileUpdate) -> UserDB:
        """
        Update the caller's own display name and avatar.

        Args:
            user: User being edited
            data: Fields to change

        Returns:
            UserDB: Updated user
        """
        changes = data.model_dump(exclude_unset=True)
        if changes.get("name") is not None:
            user.name = changes["name"].strip()
        if "image" in changes:
            user.image = changes["image"] or None
        user.updated_at = datetime.now(tz=UTC)
        return await self._add_and_refresh(user)
