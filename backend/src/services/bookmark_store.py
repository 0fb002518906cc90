"""Persistence operations for bookmarks over an async SQLAlchemy session."""
import logging
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from models.bookmark import Bookmark
from services.exceptions import InfrastructureError

logger = logging.getLogger(__name__)


class BookmarkStore:
    """
    Bookmark table access scoped to one request's session.

    Ids are assigned by the database on insert. Each write is committed before
    the method returns. Any SQLAlchemy failure, including one raised by the
    commit, rolls the session back and is re-raised as InfrastructureError.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def _commit(self, operation: str) -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise InfrastructureError(operation) from e

    async def list(self) -> list[Bookmark]:
        """Return all bookmarks in insertion (id) order."""
        try:
            result = await self.db.execute(select(Bookmark).order_by(Bookmark.id))
        except SQLAlchemyError as e:
            raise InfrastructureError("list") from e
        return list(result.scalars().all())

    async def get_by_id(self, bookmark_id: int) -> Bookmark | None:
        """Return the bookmark with this id, or None."""
        try:
            result = await self.db.execute(
                select(Bookmark).where(Bookmark.id == bookmark_id),
            )
        except SQLAlchemyError as e:
            raise InfrastructureError("get_by_id") from e
        return result.scalar_one_or_none()

    async def insert(self, fields: dict[str, Any]) -> Bookmark:
        """Insert a new bookmark and return it with its assigned id."""
        bookmark = Bookmark(**fields)
        self.db.add(bookmark)
        await self._commit("insert")
        try:
            await self.db.refresh(bookmark)
        except SQLAlchemyError as e:
            raise InfrastructureError("insert") from e
        return bookmark

    async def delete_by_id(self, bookmark_id: int) -> bool:
        """Delete the bookmark with this id. Returns False if it did not exist."""
        try:
            result = await self.db.execute(
                delete(Bookmark).where(Bookmark.id == bookmark_id),
            )
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise InfrastructureError("delete_by_id") from e
        if result.rowcount == 0:
            return False
        await self._commit("delete_by_id")
        return True

    async def update(self, bookmark_id: int, fields: dict[str, Any]) -> bool:
        """
        Overwrite the given fields on a bookmark.

        Fields not present in `fields` keep their stored values. Returns False
        if the bookmark does not exist.
        """
        bookmark = await self.get_by_id(bookmark_id)
        if bookmark is None:
            return False
        for field, value in fields.items():
            setattr(bookmark, field, value)
        await self._commit("update")
        return True
