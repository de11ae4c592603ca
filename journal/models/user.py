"""User database model using SQLModel."""

from datetime import UTC, datetime
from enum import StrEnum
from typing import cast
from uuid import UUID, uuid4

from pydantic import ConfigDict
from sqlalchemy import Boolean, DateTime, false
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel, String


class Role(StrEnum):
    """Authorization roles, the only axis permissions are decided on."""

    ADMIN = "admin"
    EDITOR = "editor"
    AUTHOR = "author"


class UserDB(SQLModel, table=True):
    """
    User database model.

    Users sign in to the admin area. Articles and media keep a weak
    reference to their user which is cleared when the user is deleted.
    """

    __tablename__ = cast("declared_attr[str]", "users")

    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        nullable=False,
        description="User ID",
    )

    name: str = Field(
        sa_column=Column(String(100), nullable=False),
        description="Display name",
    )
    email: str = Field(
        sa_column=Column(String(255), unique=True, nullable=False, index=True),
        description="Email address (unique)",
    )
    email_verified: bool = Field(
        default=False,
        sa_column=Column(Boolean, nullable=False, server_default=false()),
        description="Whether the email address has been verified",
    )
    password_hash: str | None = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="Argon2 password hash",
    )
    image: str | None = Field(
        default=None,
        sa_column=Column(String(500)),
        description="Profile image URL",
    )
    role: str = Field(
        default=Role.AUTHOR.value,
        sa_column=Column(String(20), nullable=False, server_default="author", index=True),
        description="User role (admin, editor, author)",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Creation timestamp",
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Last update timestamp",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "name": "Ada Lovelace",
                "email": "ada@example.com",
                "role": "author",
                "image": None,
            },
        },
    )
