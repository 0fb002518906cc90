"""Bookmark model for storing saved URLs."""
from sqlalchemy import CheckConstraint, Float, Text
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base, TimestampMixin


class Bookmark(Base, TimestampMixin):
    """
    Bookmark model - a saved URL with a title, description and rating.

    title and description are stored exactly as submitted (markup included);
    they are sanitized when serialized, not when written.
    """

    __tablename__ = "bookmarks"
    __table_args__ = (
        CheckConstraint("rating >= 0 AND rating <= 5", name="ck_bookmarks_rating_range"),
        # Never reuse ids of deleted rows on SQLite (Postgres sequences never do)
        {"sqlite_autoincrement": True},
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    rating: Mapped[float] = mapped_column(Float, nullable=False)
