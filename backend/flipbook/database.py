"""
Flipbook Backend — Document Store Client
==========================================

What:  Motor (async MongoDB) client lifecycle, collection names, index setup,
       and the FastAPI dependency that hands the database to route handlers.
How:   One AsyncIOMotorClient per process, opened in the application lifespan
       and closed on shutdown. Routes receive the database via Depends(get_database)
       and pass it explicitly to services.
When:  Client is created at startup; the database handle is shared by all requests.

Collections:
    images         page images and their overlays/metadata/alt text
    analytics      per-page view counters (keyed by pageIndex)
    project_views  per-project view counters (keyed by shareId)
    bookmarks      per-page bookmarks
    projects       shareable flipbook projects (keyed by shareId)

Indexes (created at startup, idempotent):
    projects.shareId         unique
    analytics.pageIndex      unique
    project_views.shareId    unique
    images.pageIndex         non-unique (sort + lookup)
    bookmarks.pageIndex      non-unique
    projects (isPublic, createdAt desc)
"""

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING

from flipbook.config import settings

logger = logging.getLogger(__name__)


IMAGES = "images"
ANALYTICS = "analytics"
PROJECT_VIEWS = "project_views"
BOOKMARKS = "bookmarks"
PROJECTS = "projects"


class MongoDB:
    """MongoDB connection manager."""

    def __init__(self):
        self.client: Optional[AsyncIOMotorClient] = None
        self.database: Optional[AsyncIOMotorDatabase] = None

    async def connect(self) -> None:
        """
        Open the client and verify the deployment answers a ping.

        Raises:
            pymongo.errors.PyMongoError: the server could not be reached within
            MONGODB_TIMEOUT_MS. The lifespan lets this abort startup.
        """
        self.client = AsyncIOMotorClient(
            settings.mongodb_uri,
            serverSelectionTimeoutMS=settings.mongodb_timeout_ms,
            tz_aware=True,
        )
        self.database = self.client[settings.mongodb_database]
        await self.client.admin.command("ping")
        logger.info("Connected to MongoDB database '%s'", settings.mongodb_database)

    async def disconnect(self) -> None:
        if self.client is not None:
            self.client.close()
            self.client = None
            self.database = None
            logger.info("Disconnected from MongoDB")

    async def ping(self) -> bool:
        """Lightweight reachability probe used by the health check."""
        if self.client is None:
            return False
        await self.client.admin.command("ping")
        return True


# Process-wide connection manager
mongodb = MongoDB()


async def ensure_indexes(db: AsyncIOMotorDatabase) -> None:
    """
    Create the indexes every query path relies on.

    `create_index` is a no-op when an identical index already exists, so this
    runs on every startup.
    """
    await db[PROJECTS].create_index([("shareId", ASCENDING)], unique=True)
    await db[PROJECTS].create_index([("isPublic", ASCENDING), ("createdAt", DESCENDING)])
    await db[ANALYTICS].create_index([("pageIndex", ASCENDING)], unique=True)
    await db[PROJECT_VIEWS].create_index([("shareId", ASCENDING)], unique=True)
    await db[IMAGES].create_index([("pageIndex", ASCENDING)])
    await db[BOOKMARKS].create_index([("pageIndex", ASCENDING)])
    logger.info("MongoDB indexes ensured")


# ── Database Dependency ───────────────────────────────────────────────────
def get_database() -> AsyncIOMotorDatabase:
    """
    FastAPI dependency that provides the shared database handle.

    Example usage in a route:
        @router.get("/images")
        async def list_images(db: AsyncIOMotorDatabase = Depends(get_database)):
            return await image_service.list_images(db)

    Raises:
        RuntimeError: the lifespan has not connected yet.
    """
    if mongodb.database is None:
        raise RuntimeError("MongoDB is not connected")
    return mongodb.database
