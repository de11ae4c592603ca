"""Media library database model."""

from datetime import UTC, datetime
from typing import cast
from uuid import UUID, uuid4

from sqlalchemy import BigInteger, DateTime, Integer
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, ForeignKey, SQLModel, String


class MediaDB(SQLModel, table=True):
    """
    An uploaded file stored in object storage.

    ``filename`` is the storage key; the binary content itself never
    touches the database.
    """

    __tablename__ = cast("declared_attr[str]", "media")

    id: UUID = Field(default_factory=uuid4, primary_key=True, nullable=False)

    filename: str = Field(
        sa_column=Column(String(500), nullable=False),
        description="Storage key",
    )
    original_filename: str = Field(
        sa_column=Column(String(500), nullable=False),
        description="Filename as uploaded",
    )
    url: str = Field(
        sa_column=Column(String(1000), nullable=False, index=True),
        description="Public URL",
    )
    thumbnail_url: str | None = Field(default=None, sa_column=Column(String(1000)))
    mime_type: str = Field(sa_column=Column(String(100), nullable=False))
    size: int = Field(
        sa_column=Column(BigInteger, nullable=False),
        description="Size in bytes",
    )
    width: int | None = Field(default=None, sa_column=Column(Integer))
    height: int | None = Field(default=None, sa_column=Column(Integer))
    alt_text: str | None = Field(default=None, sa_column=Column(String(500)))
    caption: str | None = Field(default=None, sa_column=Column(String(1000)))
    uploaded_by: UUID | None = Field(
        default=None,
        sa_column=Column(
            "uploaded_by",
            ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
            index=True,
        ),
        description="Uploader (weak reference to users.id)",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
