"""Authentication service: registration and password login."""

from journal.errors.auth import InvalidCredentialsError, RegistrationClosedError
from journal.managers.password_manager import hash_password, verify_password
from journal.managers.token_manager import create_access_token
from journal.models import Role, UserDB
from journal.monitoring import get_logger
from journal.repositories import SiteSettingsRepository, UserRepository
from journal.schemas.auth import LoginRequest, RegisterRequest, Token

logger = get_logger(__name__)


class AuthService:
    """Service for handling user authentication."""

    def __init__(
        self,
        user_repo: UserRepository,
        settings_repo: SiteSettingsRepository,
    ) -> None:
        """
        Initialize the auth service.

        Args:
            user_repo: User repository for database operations
            settings_repo: Site settings, consulted for the registration switch
        """
        self.user_repo = user_repo
        self.settings_repo = settings_repo

    async def register(self, data: RegisterRequest) -> UserDB:
        """
        Register a new account.

        New accounts are authors, except the very first account, which
        becomes an admin so a fresh installation can be set up.

        Args:
            data: Registration form

        Returns:
            UserDB: Created user

        Raises:
            RegistrationClosedError: If sign-ups are disabled
            DuplicateEntryError: If the email is taken
        """
        site_settings = await self.settings_repo.get_settings()
        if not site_settings.allow_registration:
            raise RegistrationClosedError

        await self.user_repo.lock_first_user_check()
        role = Role.ADMIN if await self.user_repo.count() == 0 else Role.AUTHOR
        user = await self.user_repo.create(
            name=data.name,
            email=str(data.email),
            password_hash=await hash_password(data.password),
            role=role,
        )
        logger.info("User registered", user_id=str(user.id), role=user.role)
        return user

    async def authenticate_user(self, email: str, password: str) -> UserDB:
        """
        Authenticate a user by email and password.

        Raises:
            InvalidCredentialsError: If authentication fails
        """
        user = await self.user_repo.get_by_email(email)
        # Unknown accounts still pay for a verification.
        if not await verify_password(password, user.password_hash if user else None):
            logger.info("Failed login attempt")
            raise InvalidCredentialsError
        if user is None:
            raise InvalidCredentialsError
        return user

    @staticmethod
    def create_token_for_user(user: UserDB) -> Token:
        return Token(access_token=create_access_token(user_id=user.id, email=user.email))

    async def login(self, data: LoginRequest) -> tuple[UserDB, Token]:
        """
        Verify credentials and issue an access token.

        Args:
            data: Login form

        Returns:
            tuple: The user and their new token
        """
        user = await self.authenticate_user(str(data.email), data.password)
        logger.info("User logged in", user_id=str(user.id))
        return user, self.create_token_for_user(user)
