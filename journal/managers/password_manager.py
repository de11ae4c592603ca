"""
Password hashing using Argon2id through passlib's CryptContext.

Hashing is CPU bound, so the async helpers run it on a small thread pool
instead of the event loop.
"""

from asyncio import get_running_loop
from concurrent.futures import ThreadPoolExecutor

from passlib.context import CryptContext
from passlib.exc import InternalBackendError

from journal.configs import CONFIG_MAP, settings
from journal.errors.auth import PasswordHashingError
from journal.monitoring import get_logger

executor = ThreadPoolExecutor(max_workers=4)
logger = get_logger(__name__)


class PasswordHasher:
    """
    Argon2id password hashing and verification.

    Cost parameters come from ``CONFIG_MAP`` for the configured
    ``PASSWORD_SECURITY_LEVEL``.
    """

    def __init__(self, level: str | None = None) -> None:
        self.level = level or settings.PASSWORD_SECURITY_LEVEL
        config = CONFIG_MAP[self.level]
        self.pwd_context = CryptContext(
            schemes=["argon2"],
            argon2__memory_cost=config.memory_cost,
            argon2__time_cost=config.time_cost,
            argon2__parallelism=config.parallelism,
        )
        logger.debug("PasswordHasher initialized", level=self.level)

    def hash(self, password: str) -> str:
        """
        Hash a plaintext password.

        Args:
            password: The plaintext password to hash

        Returns:
            str: The Argon2id hash

        Raises:
            ValueError: If password is empty
            PasswordHashingError: If the backend fails
        """
        if not password:
            mssg = "Password cannot be empty"
            raise ValueError(mssg)
        try:
            return self.pwd_context.hash(password)
        except (ValueError, InternalBackendError, UnicodeError) as e:
            logger.exception("Error hashing password", level=self.level)
            raise PasswordHashingError from e

    def verify(self, password: str, hashed_password: str | None) -> bool:
        """
        Verify a plaintext password against a stored hash.

        A missing hash still spends the time of a real verification so that
        unknown accounts cannot be told apart by timing.

        Args:
            password: The plaintext password
            hashed_password: The stored hash, if any

        Returns:
            bool: True if the password matches
        """
        if not hashed_password:
            self.pwd_context.dummy_verify()
            return False
        try:
            return self.pwd_context.verify(password, hashed_password)
        except ValueError:
            logger.warning("Stored hash is corrupted or has an unknown format")
            return False


_default_hasher: PasswordHasher | None = None


def get_password_hasher() -> PasswordHasher:
    """Return the process-wide hasher, creating it on first use."""
    global _default_hasher  # noqa: PLW0603
    if _default_hasher is None:
        _default_hasher = PasswordHasher()
    return _default_hasher


async def hash_password(password: str) -> str:
    """
    Hash ``password`` off the event loop.

    Args:
        password: The plaintext password to hash

    Returns:
        str: The hashed password
    """
    return await get_running_loop().run_in_executor(
        executor,
        get_password_hasher().hash,
        password,
    )


async def verify_password(password: str, hashed_password: str | None) -> bool:
    """
    Verify ``password`` off the event loop.

    Args:
        password: The plaintext password to verify
        hashed_password: The stored hash, if any

    Returns:
        bool: True if password matches, False otherwise
    """
    return await get_running_loop().run_in_executor(
        executor,
        get_password_hasher().verify,
        password,
        hashed_password,
    )
