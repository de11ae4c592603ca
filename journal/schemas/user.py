"""User and profile schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from journal.configs.settings import MIN_NAME_LENGTH
from journal.models.user import Role
from journal.schemas.base import CamelModel


class UserResponse(CamelModel):
    """Public user information (no password hash)."""

    id: UUID
    name: str
    email: str
    role: Role
    image: str | None = None
    email_verified: bool = False
    created_at: datetime


class UserRoleUpdate(CamelModel):
    """Admin request to change a user's role."""

    role: Role = Field(..., examples=["editor"])


class ProfileUpdate(CamelModel):
    """Fields a user may change on their own profile."""

    name: str | None = Field(default=None, min_length=MIN_NAME_LENGTH, max_length=100)
    image: str | None = Field(default=None, max_length=500)


class UserListResponse(CamelModel):
    items: list[UserResponse]
    total: int
