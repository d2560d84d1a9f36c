"""
Flipbook Backend — Bookmark Route Handlers
============================================

DELETE /api/bookmarks/{pageIndex} always answers 200; deletedCount tells the
client whether anything was there.
"""

from typing import List

from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from flipbook.database import get_database
from flipbook.schemas.bookmark import BookmarkCreate, BookmarkResponse
from flipbook.schemas.common import DeletedCountResponse, ErrorResponse
from flipbook.services.bookmark_service import bookmark_service

router = APIRouter(prefix="/api/bookmarks", tags=["Bookmarks"])

_SERVER_ERROR = {500: {"description": "Store error", "model": ErrorResponse}}


@router.post(
    "",
    status_code=201,
    response_model=BookmarkResponse,
    responses=_SERVER_ERROR,
    summary="Bookmark a page",
)
async def create_bookmark(
    body: BookmarkCreate,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> BookmarkResponse:
    return await bookmark_service.create_bookmark(db, body.page_index, body.title)


@router.get(
    "",
    response_model=List[BookmarkResponse],
    responses=_SERVER_ERROR,
    summary="List bookmarks ordered by page",
)
async def list_bookmarks(
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> List[BookmarkResponse]:
    return await bookmark_service.list_bookmarks(db)


@router.delete(
    "/{page_index}",
    response_model=DeletedCountResponse,
    responses=_SERVER_ERROR,
    summary="Remove the bookmark of a page",
)
async def delete_bookmark(
    page_index: int,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> DeletedCountResponse:
    return await bookmark_service.delete_bookmark(db, page_index)
