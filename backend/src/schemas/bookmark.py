"""Pydantic schemas for bookmark endpoints."""
from pydantic import BaseModel, ConfigDict, field_validator

from services.sanitizer import sanitize


class BookmarkCreate(BaseModel):
    """Normalized payload for creating a bookmark (output of validate_create)."""

    title: str
    url: str
    description: str
    rating: float


class BookmarkUpdate(BaseModel):
    """
    Normalized payload for a partial update (output of validate_update).

    Only fields the client supplied are "set"; use model_dump(exclude_unset=True)
    to get the fields to merge onto the stored bookmark.
    """

    title: str | None = None
    url: str | None = None
    description: str | None = None
    rating: float | None = None


class BookmarkResponse(BaseModel):
    """
    Outbound representation of a bookmark.

    title and description are sanitized here, at the read boundary; the stored
    values are left untouched. id, url and rating pass through as stored.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    url: str
    description: str
    rating: float

    @field_validator("title", "description")
    @classmethod
    def strip_active_markup(cls, v: str) -> str:
        """Neutralize script-bearing markup in free-text fields."""
        return sanitize(v)
