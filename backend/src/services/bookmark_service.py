"""Service layer for bookmark CRUD operations."""
import logging
from typing import Any

from models.bookmark import Bookmark
from schemas.bookmark import BookmarkResponse
from schemas.validators import validate_create, validate_update
from services.bookmark_store import BookmarkStore
from services.exceptions import BookmarkNotFoundError, BookmarkValidationError

logger = logging.getLogger(__name__)


def serialize_bookmark(bookmark: Bookmark) -> BookmarkResponse:
    """Build the outbound representation (title and description sanitized)."""
    return BookmarkResponse.model_validate(bookmark)


async def list_bookmarks(store: BookmarkStore) -> list[BookmarkResponse]:
    """Return every bookmark, serialized, in the order the store returns them."""
    bookmarks = await store.list()
    return [serialize_bookmark(b) for b in bookmarks]


async def get_bookmark(store: BookmarkStore, bookmark_id: int) -> BookmarkResponse:
    """
    Return one serialized bookmark.

    Raises:
        BookmarkNotFoundError: If no bookmark has this id.
    """
    bookmark = await store.get_by_id(bookmark_id)
    if bookmark is None:
        logger.error("Bookmark with id %s not found", bookmark_id)
        raise BookmarkNotFoundError(bookmark_id)
    return serialize_bookmark(bookmark)


async def create_bookmark(store: BookmarkStore, payload: Any) -> BookmarkResponse:
    """
    Validate a payload and persist it as a new bookmark.

    Validation runs before anything is written; the id comes from the store.

    Raises:
        BookmarkValidationError: If the payload breaks a validation rule.
    """
    try:
        data = validate_create(payload)
    except BookmarkValidationError as e:
        logger.error("Rejected bookmark create: %s", e.message)
        raise

    bookmark = await store.insert(data.model_dump())
    logger.info("Bookmark with id %s created", bookmark.id)
    return serialize_bookmark(bookmark)


async def delete_bookmark(store: BookmarkStore, bookmark_id: int) -> None:
    """
    Delete a bookmark.

    Raises:
        BookmarkNotFoundError: If no bookmark has this id.
    """
    deleted = await store.delete_by_id(bookmark_id)
    if not deleted:
        logger.error("Bookmark with id %s not found", bookmark_id)
        raise BookmarkNotFoundError(bookmark_id)
    logger.info("Bookmark with id %s deleted", bookmark_id)


async def update_bookmark(
    store: BookmarkStore,
    bookmark_id: int,
    payload: Any,
) -> None:
    """
    Merge the supplied fields of a partial payload onto an existing bookmark.

    Existence is checked first, then the payload is validated. Only recognized
    fields that were supplied are written; every other field keeps its stored
    value.

    Raises:
        BookmarkNotFoundError: If no bookmark has this id.
        BookmarkValidationError: If the payload has no recognized field or a
            supplied field breaks its rule.
    """
    existing = await store.get_by_id(bookmark_id)
    if existing is None:
        logger.error("Bookmark with id %s not found", bookmark_id)
        raise BookmarkNotFoundError(bookmark_id)

    try:
        data = validate_update(payload)
    except BookmarkValidationError as e:
        logger.error("Rejected update of bookmark %s: %s", bookmark_id, e.message)
        raise

    updated = await store.update(bookmark_id, data.model_dump(exclude_unset=True))
    if not updated:
        # Deleted between the existence check and the write
        raise BookmarkNotFoundError(bookmark_id)
    logger.info("Bookmark with id %s updated", bookmark_id)
