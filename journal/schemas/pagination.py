"""Pagination metadata schema."""

from pydantic import Field

from journal.schemas.base import CamelModel


class PaginationResponse(CamelModel):
    """
    Pagination block returned next to every listing.

    Built with ``PaginationResponse.model_validate(page)`` from a repository
    ``Page``; its properties map onto these fields.
    """

    page: int = Field(ge=1, examples=[1])
    limit: int = Field(ge=1, examples=[10])
    total: int = Field(ge=0, examples=[25])
    total_pages: int = Field(ge=0, examples=[3])
    has_next: bool = Field(examples=[True])
    has_prev: bool = Field(examples=[False])
