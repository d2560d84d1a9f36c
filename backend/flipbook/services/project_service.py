"""
Flipbook Backend — Project Service
====================================

What:  Save, fetch, list, update and delete shareable flipbook projects.
Who:   Called by routes/projects.py.

Flow (GET /api/projects/{shareId}):
    ┌──────────────┐    ┌──────────────────┐    ┌──────────────┐
    │  find_one    │───▶│  count the view   │───▶│  return the  │
    │  by shareId  │    │  (best effort)    │    │  document    │
    └──────────────┘    └──────────────────┘    └──────────────┘
           │ none                │ fails
           ▼                     ▼
     NotFoundError         logged, ignored

Visibility:
    GET /api/projects lists only isPublic projects and never includes the
    password. A direct fetch by shareId returns the full document, password
    included; the server does not gate access on it.
"""

import logging
from typing import Any, Dict, List

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import DESCENDING, ReturnDocument
from pymongo.errors import PyMongoError

from flipbook.config import settings
from flipbook.database import PROJECTS
from flipbook.exceptions import NotFoundError, StorageError
from flipbook.models.base import utcnow
from flipbook.models.project import (
    ProjectDocument,
    default_project_description,
    default_project_name,
)
from flipbook.schemas.analytics import ProjectViewResponse
from flipbook.schemas.common import MessageResponse
from flipbook.schemas.project import (
    ProjectCreate,
    ProjectCreatedResponse,
    ProjectResponse,
    ProjectSummary,
)
from flipbook.services.analytics_service import analytics_service
from flipbook.services.share_id import insert_with_share_id

logger = logging.getLogger(__name__)

# Top-level keys a PUT may not change
IMMUTABLE_FIELDS = frozenset({"_id", "shareId"})


def _not_found(share_id: str) -> NotFoundError:
    return NotFoundError(resource="project", resource_id=share_id, message="Project not found")


class ProjectService:
    """
    Store operations for projects.

    Error Handling Strategy:
        Store failures become StorageError. Only creation attaches the driver
        message as `reason`, which the error handler returns to the client.
        The view counter on fetch is isolated: its StorageError is logged at
        WARNING and swallowed.
    """

    async def create_project(
        self, db: AsyncIOMotorDatabase, payload: ProjectCreate
    ) -> ProjectCreatedResponse:
        """
        Save a new project under a freshly generated shareId.

        Defaults:
            name         "Flipbook <M/D/YYYY>"
            description  "Flipbook with <N> pages" (N = number of images sent)
            isPublic     false
            password     ""

        Raises:
            StorageError: insert failed, including a shareId collision on
                every attempt (→ 500, with details.reason)
        """
        now = utcnow()
        images = payload.images or []
        document = ProjectDocument(
            name=payload.name or default_project_name(now),
            description=payload.description or default_project_description(images),
            settings=payload.settings or {},
            is_public=payload.is_public or False,
            password=payload.password or "",
            images=images,
            text_overlays=payload.text_overlays or {},
            page_metadata=payload.page_metadata or {},
            alt_texts=payload.alt_texts or {},
            created_at=now,
            updated_at=now,
        ).to_document()

        try:
            document = await insert_with_share_id(db[PROJECTS], document)
        except PyMongoError as e:
            logger.error("Failed to save project: %s", e, exc_info=True)
            raise StorageError(
                message="Failed to save project",
                reason=str(e),
                context={"error_type": type(e).__name__},
            )

        logger.info("Project saved with shareId: %s", document["shareId"])
        return ProjectCreatedResponse.model_validate(document)

    async def get_project(self, db: AsyncIOMotorDatabase, share_id: str) -> ProjectResponse:
        """
        Fetch a project and count the view.

        Raises:
            NotFoundError: unknown shareId (→ 404)
            StorageError: the lookup itself failed (→ 500)
        """
        try:
            document = await db[PROJECTS].find_one({"shareId": share_id})
        except PyMongoError as e:
            logger.error("Failed to fetch project %s: %s", share_id, e)
            raise StorageError(message="Failed to fetch project")

        if document is None:
            raise _not_found(share_id)

        try:
            await analytics_service.record_project_view(db, share_id)
        except StorageError as e:
            logger.warning("Analytics tracking failed for project %s: %s", share_id, e.context)

        logger.info("Project %s accessed", share_id)
        return ProjectResponse.model_validate(document)

    async def list_public_projects(self, db: AsyncIOMotorDatabase) -> List[ProjectSummary]:
        """Newest public projects, capped at PUBLIC_PROJECTS_LIMIT, without passwords."""
        try:
            documents = await (
                db[PROJECTS]
                .find({"isPublic": True}, {"password": 0})
                .sort([("createdAt", DESCENDING)])
                .limit(settings.public_projects_limit)
                .to_list(length=None)
            )
        except PyMongoError as e:
            logger.error("Failed to fetch public projects: %s", e)
            raise StorageError(message="Failed to fetch projects")
        return [ProjectSummary.model_validate(d) for d in documents]

    async def update_project(
        self, db: AsyncIOMotorDatabase, share_id: str, updates: Dict[str, Any]
    ) -> ProjectResponse:
        """
        Overwrite the supplied top-level fields and refresh updatedAt.

        Fields not in `updates` are left as they are. `_id` and `shareId` are
        ignored if present. Known fields are converted to their stored types
        first; keys the project schema does not declare are stored as sent.

        Raises:
            ValidationError: a known field has a value of the wrong type; nothing
                is written (→ 400)
            NotFoundError: unknown shareId (→ 404)
            StorageError: update failed (→ 500)
        """
        fields = ProjectDocument.convert_fields(
            {k: v for k, v in updates.items() if k not in IMMUTABLE_FIELDS}
        )
        fields["updatedAt"] = utcnow()

        try:
            document = await db[PROJECTS].find_one_and_update(
                {"shareId": share_id},
                {"$set": fields},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error("Failed to update project %s: %s", share_id, e)
            raise StorageError(message="Failed to update project")

        if document is None:
            raise _not_found(share_id)

        logger.info("Project %s updated (%s)", share_id, ", ".join(sorted(fields)))
        return ProjectResponse.model_validate(document)

    async def delete_project(self, db: AsyncIOMotorDatabase, share_id: str) -> MessageResponse:
        """
        Delete a project, then drop its view counter (best effort).

        Raises:
            NotFoundError: unknown shareId (→ 404)
            StorageError: delete failed (→ 500)
        """
        try:
            result = await db[PROJECTS].delete_one({"shareId": share_id})
        except PyMongoError as e:
            logger.error("Failed to delete project %s: %s", share_id, e)
            raise StorageError(message="Failed to delete project")

        if result.deleted_count == 0:
            raise _not_found(share_id)

        try:
            await analytics_service.delete_project_views(db, share_id)
        except StorageError as e:
            logger.warning("Could not remove view counter of project %s: %s", share_id, e.context)

        logger.info("Project %s deleted", share_id)
        return MessageResponse(message="Project deleted successfully")

    async def get_project_views(
        self, db: AsyncIOMotorDatabase, share_id: str
    ) -> ProjectViewResponse:
        """
        View counter of an existing project.

        Raises:
            NotFoundError: unknown shareId (→ 404)
        """
        try:
            exists = await db[PROJECTS].count_documents({"shareId": share_id}, limit=1)
        except PyMongoError as e:
            logger.error("Failed to look up project %s: %s", share_id, e)
            raise StorageError(message="Failed to fetch project analytics")

        if not exists:
            raise _not_found(share_id)
        return await analytics_service.get_project_views(db, share_id)


project_service = ProjectService()
