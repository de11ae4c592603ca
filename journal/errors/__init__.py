from journal.errors.auth import (
    ForbiddenError,
    InvalidCredentialsError,
    PasswordHashingError,
    RegistrationClosedError,
    UnauthenticatedError,
    auth_exception_handler,
)
from journal.errors.base import BaseAppError, create_exception_handler
from journal.errors.database import (
    ConflictError,
    DatabaseError,
    DuplicateEntryError,
    RecordNotFoundError,
    database_exception_handler,
)
from journal.errors.upload import (
    ImageTooLargeError,
    InvalidImageError,
    NoFileError,
    StorageError,
    UnsupportedImageTypeError,
    UploadError,
    UpstreamServiceError,
    upload_exception_handler,
)
from journal.errors.validation import (
    SelfRoleChangeError,
    ValidationError,
    app_validation_exception_handler,
    validation_exception_handler,
)

__all__ = [
    "BaseAppError",
    "ConflictError",
    "DatabaseError",
    "DuplicateEntryError",
    "ForbiddenError",
    "ImageTooLargeError",
    "InvalidCredentialsError",
    "InvalidImageError",
    "NoFileError",
    "PasswordHashingError",
    "RecordNotFoundError",
    "RegistrationClosedError",
    "SelfRoleChangeError",
    "StorageError",
    "UnauthenticatedError",
    "UnsupportedImageTypeError",
    "UploadError",
    "UpstreamServiceError",
    "ValidationError",
    "app_validation_exception_handler",
    "auth_exception_handler",
    "create_exception_handler",
    "database_exception_handler",
    "upload_exception_handler",
    "validation_exception_handler",
]
