"""
Flipbook Backend — Image Route Handlers
=========================================

What:  /api/images (single and bulk), the per-page field updates, and /api/search.
How:   Parse the request, call ImageService, return its result.

Image responses are serialized with response_model_exclude_unset, so a
document created by a per-field upsert is returned with only the fields it has.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from flipbook.database import get_database
from flipbook.schemas.common import DeletedCountResponse, ErrorResponse
from flipbook.schemas.image import (
    AltTextUpdate,
    BulkImageCreate,
    BulkImageDelete,
    ImageCreate,
    ImageDelete,
    ImageResponse,
    MetadataUpdate,
    TextOverlaysUpdate,
)
from flipbook.services.image_service import image_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Images"])

_SERVER_ERROR = {500: {"description": "Store error", "model": ErrorResponse}}
_BAD_REQUEST = {400: {"description": "Missing or invalid fields", "model": ErrorResponse}}


@router.post(
    "/images",
    status_code=201,
    response_model=ImageResponse,
    response_model_exclude_unset=True,
    responses={**_BAD_REQUEST, **_SERVER_ERROR},
    summary="Save an image for a page",
)
async def create_image(
    body: ImageCreate,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> ImageResponse:
    return await image_service.create_image(
        db, url=body.url, page_index=body.page_index, page_name=body.page_name or ""
    )


@router.get(
    "/images",
    response_model=List[ImageResponse],
    response_model_exclude_unset=True,
    responses=_SERVER_ERROR,
    summary="List all images ordered by page",
)
async def list_images(db: AsyncIOMotorDatabase = Depends(get_database)) -> List[ImageResponse]:
    return await image_service.list_images(db)


@router.delete(
    "/images",
    response_model=DeletedCountResponse,
    responses={
        **_BAD_REQUEST,
        404: {"description": "No image for this page", "model": ErrorResponse},
        **_SERVER_ERROR,
    },
    summary="Delete the image of a page",
)
async def delete_image(
    body: ImageDelete,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> DeletedCountResponse:
    return await image_service.delete_image(db, body.page_index)


@router.post(
    "/images/bulk",
    status_code=201,
    response_model=List[ImageResponse],
    response_model_exclude_unset=True,
    responses={**_BAD_REQUEST, **_SERVER_ERROR},
    summary="Save many images in one batch",
)
async def bulk_create_images(
    body: BulkImageCreate,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> List[ImageResponse]:
    return await image_service.bulk_create(db, body.images)


@router.delete(
    "/images/bulk",
    response_model=DeletedCountResponse,
    responses=_SERVER_ERROR,
    summary="Delete the images of several pages",
)
async def bulk_delete_images(
    body: BulkImageDelete,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> DeletedCountResponse:
    return await image_service.bulk_delete(db, body.page_indexes)


@router.put(
    "/images/{page_index}/text",
    response_model=ImageResponse,
    response_model_exclude_unset=True,
    responses=_SERVER_ERROR,
    summary="Set the text overlays of a page (creates the image if needed)",
)
async def update_text_overlays(
    page_index: int,
    body: TextOverlaysUpdate,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> ImageResponse:
    return await image_service.update_text_overlays(db, page_index, body.text_overlays)


@router.put(
    "/images/{page_index}/metadata",
    response_model=ImageResponse,
    response_model_exclude_unset=True,
    responses=_SERVER_ERROR,
    summary="Set the metadata of a page (creates the image if needed)",
)
async def update_metadata(
    page_index: int,
    body: MetadataUpdate,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> ImageResponse:
    return await image_service.update_metadata(db, page_index, body.metadata)


@router.put(
    "/images/{page_index}/alt",
    response_model=ImageResponse,
    response_model_exclude_unset=True,
    responses=_SERVER_ERROR,
    summary="Set the alt text of a page (creates the image if needed)",
)
async def update_alt_text(
    page_index: int,
    body: AltTextUpdate,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> ImageResponse:
    return await image_service.update_alt_text(db, page_index, body.alt_text)


@router.get(
    "/search",
    response_model=List[ImageResponse],
    response_model_exclude_unset=True,
    responses=_SERVER_ERROR,
    summary="Search images by page name, description or tags",
    description=(
        "Case-insensitive substring match on pageName, metadata.description and "
        "metadata.tags. An empty query returns every image."
    ),
)
async def search_images(
    query: str = Query(default="", description="Text to look for"),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> List[ImageResponse]:
    return await image_service.search(db, query)
