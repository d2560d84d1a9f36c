"""
Flipbook Backend — Image Service
==================================

What:  Every query against the `images` collection.
Who:   Called by routes/images.py.

Operation → store call:
    create_image        insert_one
    list_images         find, sorted by pageIndex
    delete_image        find_one_and_delete (oldest match)
    bulk_create         insert_many (one batch)
    bulk_delete         delete_many with $in
    update_*            find_one_and_update with $set, upsert
    search              find with case-insensitive $regex on three fields

pageIndex is not unique. Operations that act on "the" image of a page
(delete, per-field update) resolve duplicates by lowest _id.

Error Handling Strategy:
    PyMongoError from any store call is logged and re-raised as StorageError
    carrying a per-operation message. ValidationError and NotFoundError pass
    through untouched.
"""

import logging
import re
from typing import Any, Dict, List

from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import ValidationError as PydanticValidationError
from pymongo import ASCENDING, ReturnDocument
from pymongo.errors import PyMongoError

from flipbook.database import IMAGES
from flipbook.exceptions import NotFoundError, StorageError, ValidationError
from flipbook.models.base import validation_reason
from flipbook.models.image import ImageDocument
from flipbook.schemas.common import DeletedCountResponse
from flipbook.schemas.image import ImageResponse

logger = logging.getLogger(__name__)

PAGE_ORDER = [("pageIndex", ASCENDING), ("_id", ASCENDING)]
OLDEST_FIRST = [("_id", ASCENDING)]


class ImageService:
    """Store operations for page images."""

    async def create_image(
        self,
        db: AsyncIOMotorDatabase,
        url: str,
        page_index: int,
        page_name: str = "",
    ) -> ImageResponse:
        """
        Insert one image.

        Raises:
            ValidationError: url empty or pageIndex not an integer (→ 400)
            StorageError: insert failed (→ 500)
        """
        if not url or not isinstance(page_index, int) or isinstance(page_index, bool):
            raise ValidationError(
                message="url and pageIndex are required",
                field="url" if not url else "pageIndex",
            )

        document = ImageDocument(
            url=url, page_index=page_index, page_name=page_name or ""
        ).to_document()
        try:
            result = await db[IMAGES].insert_one(document)
        except PyMongoError as e:
            logger.error("Failed to save image for page %s: %s", page_index, e)
            raise StorageError(
                message="Failed to save image info",
                context={"error_type": type(e).__name__},
            )
        document["_id"] = result.inserted_id
        logger.info("Image saved for page %d", page_index)
        return ImageResponse.model_validate(document)

    async def list_images(self, db: AsyncIOMotorDatabase) -> List[ImageResponse]:
        try:
            documents = await db[IMAGES].find({}).sort(PAGE_ORDER).to_list(length=None)
        except PyMongoError as e:
            logger.error("Failed to fetch images: %s", e)
            raise StorageError(message="Failed to fetch images")
        return [ImageResponse.model_validate(d) for d in documents]

    async def delete_image(
        self, db: AsyncIOMotorDatabase, page_index: int
    ) -> DeletedCountResponse:
        """
        Delete the image of a page (the oldest one if several share the index).

        Raises:
            NotFoundError: no image has this pageIndex (→ 404)
            StorageError: delete failed (→ 500)
        """
        try:
            deleted = await db[IMAGES].find_one_and_delete(
                {"pageIndex": page_index}, sort=OLDEST_FIRST
            )
        except PyMongoError as e:
            logger.error("Failed to delete image for page %s: %s", page_index, e)
            raise StorageError(message="Failed to delete image")

        if deleted is None:
            raise NotFoundError(
                resource="image",
                resource_id=str(page_index),
                message="No image found for this page",
            )

        logger.info("Image for page %d deleted", page_index)
        return DeletedCountResponse(message="Image deleted successfully", deleted_count=1)

    async def bulk_create(
        self, db: AsyncIOMotorDatabase, images: List[Dict[str, Any]]
    ) -> List[ImageResponse]:
        """
        Insert image objects in one batch.

        Each object is converted through ImageDocument (schema defaults
        filled in, declared fields coerced, extra keys kept). One object that
        cannot be converted rejects the whole batch before anything is
        written. A failed insert is reported as a whole (StorageError),
        whether or not the store applied part of it.

        Raises:
            ValidationError: an object lacks url/pageIndex or has a value of
                the wrong type (→ 400)
            StorageError: insert failed (→ 500)
        """
        if not images:
            return []

        documents = []
        for position, image in enumerate(images):
            try:
                documents.append(ImageDocument.model_validate(image).to_document())
            except PydanticValidationError as e:
                raise ValidationError(
                    message=f"Invalid image at position {position}",
                    context={"position": position, **validation_reason(e)},
                )

        try:
            result = await db[IMAGES].insert_many(documents, ordered=True)
        except PyMongoError as e:
            logger.error("Bulk insert of %d images failed: %s", len(documents), e)
            raise StorageError(
                message="Failed to bulk save images",
                context={"count": len(documents), "error_type": type(e).__name__},
            )

        for document, inserted_id in zip(documents, result.inserted_ids):
            document["_id"] = inserted_id
        logger.info("Bulk saved %d images", len(documents))
        return [ImageResponse.model_validate(d) for d in documents]

    async def bulk_delete(
        self, db: AsyncIOMotorDatabase, page_indexes: List[int]
    ) -> DeletedCountResponse:
        try:
            result = await db[IMAGES].delete_many({"pageIndex": {"$in": page_indexes}})
        except PyMongoError as e:
            logger.error("Bulk delete of pages %s failed: %s", page_indexes, e)
            raise StorageError(message="Failed to bulk delete images")
        return DeletedCountResponse(
            message="Images deleted successfully", deleted_count=result.deleted_count
        )

    # ── Per-field upserts ─────────────────────────────────────────────────

    async def update_text_overlays(
        self, db: AsyncIOMotorDatabase, page_index: int, text_overlays: List[Any]
    ) -> ImageResponse:
        return await self._set_page_field(
            db, page_index, "textOverlays", text_overlays, "Failed to update text overlays"
        )

    async def update_metadata(
        self, db: AsyncIOMotorDatabase, page_index: int, metadata: Dict[str, Any]
    ) -> ImageResponse:
        return await self._set_page_field(
            db, page_index, "metadata", metadata, "Failed to update metadata"
        )

    async def update_alt_text(
        self, db: AsyncIOMotorDatabase, page_index: int, alt_text: str
    ) -> ImageResponse:
        return await self._set_page_field(
            db, page_index, "altText", alt_text, "Failed to update alt text"
        )

    async def _set_page_field(
        self,
        db: AsyncIOMotorDatabase,
        page_index: int,
        field: str,
        value: Any,
        failure_message: str,
    ) -> ImageResponse:
        """
        Replace one field on the page's image, creating the image if absent.

        An upserted document holds only pageIndex and `field`; no url or other
        defaults are written.
        """
        try:
            document = await db[IMAGES].find_one_and_update(
                {"pageIndex": page_index},
                {"$set": {field: value}},
                sort=OLDEST_FIRST,
                upsert=True,
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error("Updating %s for page %s failed: %s", field, page_index, e)
            raise StorageError(message=failure_message, context={"field": field})
        return ImageResponse.model_validate(document)

    async def search(self, db: AsyncIOMotorDatabase, query: str) -> List[ImageResponse]:
        """
        Case-insensitive substring search over pageName, metadata.description
        and metadata.tags. The query is matched literally (regex characters are
        escaped). An empty query returns every image.
        """
        if query:
            pattern = {"$regex": re.escape(query), "$options": "i"}
            criteria = {
                "$or": [
                    {"pageName": pattern},
                    {"metadata.description": pattern},
                    {"metadata.tags": pattern},
                ]
            }
        else:
            criteria = {}

        try:
            documents = await db[IMAGES].find(criteria).sort(PAGE_ORDER).to_list(length=None)
        except PyMongoError as e:
            logger.error("Image search for %r failed: %s", query, e)
            raise StorageError(message="Failed to search images")
        return [ImageResponse.model_validate(d) for d in documents]


image_service = ImageService()
