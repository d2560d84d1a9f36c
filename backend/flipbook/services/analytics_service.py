"""
Flipbook Backend — Analytics Service
======================================

What:  View counters for pages and for shared projects.
How:   Each view is one atomic find_one_and_update with upsert + $inc, so the
       first view creates the counter and concurrent views never lose counts.

Collections:
    analytics       keyed by pageIndex   (POST /api/analytics/view)
    project_views   keyed by shareId     (side effect of GET /api/projects/{shareId})

The two counters live in separate collections so page numbers and project
ids never share a key space.
"""

import logging
from typing import Any, Dict, List

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.errors import PyMongoError

from flipbook.database import ANALYTICS, PROJECT_VIEWS
from flipbook.exceptions import StorageError
from flipbook.models.analytics import PageAnalyticsDocument, ProjectViewDocument
from flipbook.models.base import utcnow
from flipbook.schemas.analytics import PageAnalyticsResponse, ProjectViewResponse

logger = logging.getLogger(__name__)

# Fields touched by every view; the rest of the schema defaults are written once
_VIEW_FIELDS = {"views", "lastViewed"}


def _view_update(insert_defaults: Dict[str, Any]) -> Dict[str, Any]:
    update: Dict[str, Any] = {
        "$inc": {"views": 1},
        "$set": {"lastViewed": utcnow()},
    }
    if insert_defaults:
        update["$setOnInsert"] = insert_defaults
    return update


def _insert_defaults(model) -> Dict[str, Any]:
    return {k: v for k, v in model.defaults().items() if k not in _VIEW_FIELDS}


class AnalyticsService:

    async def record_view(
        self, db: AsyncIOMotorDatabase, page_index: int
    ) -> PageAnalyticsResponse:
        """Count one view of a page and return the updated counter."""
        try:
            document = await db[ANALYTICS].find_one_and_update(
                {"pageIndex": page_index},
                _view_update(_insert_defaults(PageAnalyticsDocument)),
                upsert=True,
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error("Tracking view of page %s failed: %s", page_index, e)
            raise StorageError(message="Failed to track page view")
        return PageAnalyticsResponse.model_validate(document)

    async def list_analytics(self, db: AsyncIOMotorDatabase) -> List[PageAnalyticsResponse]:
        """Page counters, most viewed first."""
        try:
            documents = await (
                db[ANALYTICS]
                .find({})
                .sort([("views", DESCENDING), ("pageIndex", ASCENDING)])
                .to_list(length=None)
            )
        except PyMongoError as e:
            logger.error("Failed to fetch analytics: %s", e)
            raise StorageError(message="Failed to fetch analytics")
        return [PageAnalyticsResponse.model_validate(d) for d in documents]

    async def record_project_view(self, db: AsyncIOMotorDatabase, share_id: str) -> None:
        """
        Count one view of a project.

        Raises:
            StorageError: the increment failed. The project fetch catches this;
            a lost view never fails the request that caused it.
        """
        try:
            await db[PROJECT_VIEWS].update_one(
                {"shareId": share_id},
                _view_update(_insert_defaults(ProjectViewDocument)),
                upsert=True,
            )
        except PyMongoError as e:
            raise StorageError(
                message="Failed to track project view",
                context={"share_id": share_id, "error_type": type(e).__name__},
            )

    async def get_project_views(
        self, db: AsyncIOMotorDatabase, share_id: str
    ) -> ProjectViewResponse:
        """View counter for a project; a zero counter if it was never viewed."""
        try:
            document = await db[PROJECT_VIEWS].find_one({"shareId": share_id})
        except PyMongoError as e:
            logger.error("Failed to fetch views of project %s: %s", share_id, e)
            raise StorageError(message="Failed to fetch project analytics")

        if document is None:
            document = ProjectViewDocument(share_id=share_id).to_document()
        return ProjectViewResponse.model_validate(document)

    async def delete_project_views(self, db: AsyncIOMotorDatabase, share_id: str) -> None:
        try:
            await db[PROJECT_VIEWS].delete_one({"shareId": share_id})
        except PyMongoError as e:
            raise StorageError(
                message="Failed to delete project analytics",
                context={"share_id": share_id, "error_type": type(e).__name__},
            )


analytics_service = AnalyticsService()
