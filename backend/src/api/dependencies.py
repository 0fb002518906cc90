"""FastAPI dependencies for injection."""
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import require_api_token
from db.session import get_async_session
from services.bookmark_store import BookmarkStore


async def get_bookmark_store(
    db: AsyncSession = Depends(get_async_session),
) -> BookmarkStore:
    """Bookmark store bound to the request's session."""
    return BookmarkStore(db)


__all__ = [
    "get_bookmark_store",
    "require_api_token",
]
