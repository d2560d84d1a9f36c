"""
Flipbook Backend — Bookmark Service
=====================================

What:  Insert, list and delete bookmarks.

Deleting a pageIndex with no bookmark is not an error: the response reports
deletedCount 0 with a 200 status.
"""

import logging
from typing import List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING
from pymongo.errors import PyMongoError

from flipbook.database import BOOKMARKS
from flipbook.exceptions import StorageError
from flipbook.models.bookmark import BookmarkDocument
from flipbook.schemas.bookmark import BookmarkResponse
from flipbook.schemas.common import DeletedCountResponse

logger = logging.getLogger(__name__)


class BookmarkService:

    async def create_bookmark(
        self, db: AsyncIOMotorDatabase, page_index: int, title: Optional[str] = None
    ) -> BookmarkResponse:
        document = BookmarkDocument(page_index=page_index, title=title or "").to_document()
        try:
            result = await db[BOOKMARKS].insert_one(document)
        except PyMongoError as e:
            logger.error("Failed to create bookmark for page %s: %s", page_index, e)
            raise StorageError(message="Failed to create bookmark")
        document["_id"] = result.inserted_id
        return BookmarkResponse.model_validate(document)

    async def list_bookmarks(self, db: AsyncIOMotorDatabase) -> List[BookmarkResponse]:
        try:
            documents = await (
                db[BOOKMARKS]
                .find({})
                .sort([("pageIndex", ASCENDING), ("_id", ASCENDING)])
                .to_list(length=None)
            )
        except PyMongoError as e:
            logger.error("Failed to fetch bookmarks: %s", e)
            raise StorageError(message="Failed to fetch bookmarks")
        return [BookmarkResponse.model_validate(d) for d in documents]

    async def delete_bookmark(
        self, db: AsyncIOMotorDatabase, page_index: int
    ) -> DeletedCountResponse:
        """Remove the oldest bookmark on a page, if any."""
        try:
            deleted = await db[BOOKMARKS].find_one_and_delete(
                {"pageIndex": page_index}, sort=[("_id", ASCENDING)]
            )
        except PyMongoError as e:
            logger.error("Failed to delete bookmark for page %s: %s", page_index, e)
            raise StorageError(message="Failed to delete bookmark")
        return DeletedCountResponse(
            message="Bookmark deleted successfully",
            deleted_count=0 if deleted is None else 1,
        )


bookmark_service = BookmarkService()
