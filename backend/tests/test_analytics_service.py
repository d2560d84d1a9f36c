"""
Flipbook Backend — Analytics Service Unit Tests
=================================================

What:  Tests for page and project view counters.
How:   Mocked `analytics` / `project_views` collections; assertions on the
       exact update documents sent to MongoDB.

What we test:
    ✅ A view is one atomic upsert with $inc and $setOnInsert defaults
    ✅ Counters are listed most viewed first
    ✅ Project views go to their own collection
    ✅ A never-viewed project reports zero views
"""

from datetime import datetime, timezone

import pytest
from bson import ObjectId
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.errors import PyMongoError

from flipbook.services.analytics_service import AnalyticsService
from flipbook.exceptions import StorageError


class TestPageViews:

    def setup_method(self):
        self.service = AnalyticsService()

    @pytest.mark.asyncio
    async def test_record_view_upserts_counter(self, mock_db):
        """First view creates the counter; the update shape makes that atomic."""
        oid = ObjectId()
        mock_db["analytics"].find_one_and_update.return_value = {
            "_id": oid,
            "pageIndex": 3,
            "views": 1,
            "timeSpent": 0,
            "lastViewed": datetime(2026, 10, 19, tzinfo=timezone.utc),
        }

        result = await self.service.record_view(mock_db, 3)

        call = mock_db["analytics"].find_one_and_update.await_args
        criteria, update = call.args
        assert criteria == {"pageIndex": 3}
        assert update["$inc"] == {"views": 1}
        assert update["$set"]["lastViewed"].tzinfo is not None
        assert update["$setOnInsert"] == {"timeSpent": 0}
        assert call.kwargs["upsert"] is True
        assert call.kwargs["return_document"] == ReturnDocument.AFTER

        assert result.id == str(oid)
        assert result.views == 1

    @pytest.mark.asyncio
    async def test_record_view_never_sets_views_on_insert(self, mock_db):
        """views in both $inc and $setOnInsert would be a MongoDB conflict."""
        mock_db["analytics"].find_one_and_update.return_value = {
            "_id": ObjectId(), "pageIndex": 0, "views": 5,
        }

        await self.service.record_view(mock_db, 0)

        update = mock_db["analytics"].find_one_and_update.await_args.args[1]
        assert "views" not in update["$setOnInsert"]
        assert "lastViewed" not in update["$setOnInsert"]

    @pytest.mark.asyncio
    async def test_record_view_failure(self, mock_db):
        mock_db["analytics"].find_one_and_update.side_effect = PyMongoError("down")

        with pytest.raises(StorageError, match="Failed to track page view"):
            await self.service.record_view(mock_db, 1)

    @pytest.mark.asyncio
    async def test_list_analytics_most_viewed_first(self, mock_db, make_cursor):
        cursor = make_cursor([
            {"_id": ObjectId(), "pageIndex": 2, "views": 9},
            {"_id": ObjectId(), "pageIndex": 0, "views": 4},
        ])
        mock_db["analytics"].find.return_value = cursor

        result = await self.service.list_analytics(mock_db)

        cursor.sort.assert_called_once_with([("views", DESCENDING), ("pageIndex", ASCENDING)])
        assert [a.page_index for a in result] == [2, 0]


class TestProjectViews:

    def setup_method(self):
        self.service = AnalyticsService()

    @pytest.mark.asyncio
    async def test_record_project_view_uses_own_collection(self, mock_db):
        await self.service.record_project_view(mock_db, "abc123")

        mock_db["project_views"].update_one.assert_awaited_once()
        criteria, update = mock_db["project_views"].update_one.await_args.args
        assert criteria == {"shareId": "abc123"}
        assert update["$inc"] == {"views": 1}
        assert "$setOnInsert" not in update
        mock_db["analytics"].find_one_and_update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_record_project_view_failure_raises_storage_error(self, mock_db):
        mock_db["project_views"].update_one.side_effect = PyMongoError("timeout")

        with pytest.raises(StorageError) as exc_info:
            await self.service.record_project_view(mock_db, "abc123")
        assert exc_info.value.context["share_id"] == "abc123"

    @pytest.mark.asyncio
    async def test_get_project_views_existing(self, mock_db):
        mock_db["project_views"].find_one.return_value = {
            "_id": ObjectId(), "shareId": "abc123", "views": 12,
        }

        result = await self.service.get_project_views(mock_db, "abc123")

        assert result.views == 12
        assert result.share_id == "abc123"

    @pytest.mark.asyncio
    async def test_get_project_views_never_viewed(self, mock_db):
        mock_db["project_views"].find_one.return_value = None

        result = await self.service.get_project_views(mock_db, "abc123")

        assert result.views == 0
        assert result.id is None
        assert result.last_viewed is None

    @pytest.mark.asyncio
    async def test_delete_project_views(self, mock_db):
        await self.service.delete_project_views(mock_db, "abc123")

        mock_db["project_views"].delete_one.assert_awaited_once_with({"shareId": "abc123"})
