"""
Flipbook Backend — Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   MongoDB is replaced by MagicMock collections whose driver methods are
       AsyncMocks, so no database is needed. Endpoint tests go through the real
       FastAPI app with get_database overridden.

Fixtures:
    ├── make_cursor: factory for a mocked Motor cursor (sort/limit/to_list)
    ├── mock_db: database whose db[name] returns one mocked collection per name
    ├── sample_image_doc / sample_project_doc: stored documents as Motor returns them
    └── test_client: HTTPX AsyncClient bound to the app
"""

import os

# Settings are read at import time; set the environment before importing flipbook
os.environ["MONGODB_URI"] = "mongodb://localhost:27017"
os.environ["MONGODB_DATABASE"] = "flipbook_test"
os.environ["LOG_LEVEL"] = "WARNING"

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import AsyncClient, ASGITransport


_ASYNC_COLLECTION_METHODS = (
    "insert_one",
    "insert_many",
    "find_one",
    "find_one_and_update",
    "find_one_and_delete",
    "update_one",
    "delete_one",
    "delete_many",
    "count_documents",
    "create_index",
)


def _cursor(documents):
    cursor = MagicMock()
    cursor.sort.return_value = cursor
    cursor.limit.return_value = cursor
    cursor.to_list = AsyncMock(return_value=list(documents))
    return cursor


def _collection():
    collection = MagicMock()
    for name in _ASYNC_COLLECTION_METHODS:
        setattr(collection, name, AsyncMock())
    collection.find = MagicMock(return_value=_cursor([]))
    return collection


@pytest.fixture
def make_cursor():
    """
    Factory for a Motor cursor mock.

    Usage:
        mock_db["images"].find.return_value = make_cursor([doc1, doc2])
    """
    return _cursor


@pytest.fixture
def mock_db():
    """
    Mock AsyncIOMotorDatabase.

    db["images"] always returns the same collection mock, so a test can set
    return values before calling the code under test and inspect calls after.
    """
    collections = {}

    def get_collection(name):
        if name not in collections:
            collections[name] = _collection()
        return collections[name]

    db = MagicMock()
    db.__getitem__.side_effect = get_collection
    return db


@pytest.fixture
def sample_image_doc():
    return {
        "_id": ObjectId(),
        "url": "https://cdn.example.com/pages/0.png",
        "pageIndex": 0,
        "pageName": "Cover",
        "uploadedAt": datetime(2026, 10, 1, 12, 0, tzinfo=timezone.utc),
        "metadata": {"description": "A cat on a mat", "tags": ["cat", "cover"]},
        "textOverlays": [],
        "altText": "",
        "filters": {},
    }


@pytest.fixture
def sample_project_doc():
    now = datetime(2026, 10, 1, 12, 0, tzinfo=timezone.utc)
    return {
        "_id": ObjectId(),
        "name": "Summer trip",
        "description": "Flipbook with 2 pages",
        "settings": {"flipSpeed": 600},
        "isPublic": True,
        "password": "hunter2",
        "shareId": "abc123xyz0mg8w1c9d",
        "images": [{"url": "a.png"}, {"url": "b.png"}],
        "textOverlays": {},
        "pageMetadata": {},
        "altTexts": {},
        "createdAt": now,
        "updatedAt": now,
    }


@pytest_asyncio.fixture
async def test_client(mock_db):
    """
    HTTPX AsyncClient talking to the FastAPI app in-process.

    The lifespan does not run under ASGITransport, so no MongoDB connection
    is attempted; every route receives `mock_db`.
    """
    from flipbook.database import get_database
    from flipbook.main import app

    app.dependency_overrides[get_database] = lambda: mock_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
