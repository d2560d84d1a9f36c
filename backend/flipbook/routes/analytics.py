"""Flipbook Backend — Page Analytics Route Handlers."""

from typing import List

from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from flipbook.database import get_database
from flipbook.schemas.analytics import PageAnalyticsResponse, PageViewCreate
from flipbook.schemas.common import ErrorResponse
from flipbook.services.analytics_service import analytics_service

router = APIRouter(prefix="/api/analytics", tags=["Analytics"])


@router.post(
    "/view",
    response_model=PageAnalyticsResponse,
    responses={500: {"description": "Store error", "model": ErrorResponse}},
    summary="Count one view of a page",
)
async def record_view(
    body: PageViewCreate,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> PageAnalyticsResponse:
    return await analytics_service.record_view(db, body.page_index)


@router.get(
    "",
    response_model=List[PageAnalyticsResponse],
    responses={500: {"description": "Store error", "model": ErrorResponse}},
    summary="Page view counters, most viewed first",
)
async def list_analytics(
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> List[PageAnalyticsResponse]:
    return await analytics_service.list_analytics(db)
