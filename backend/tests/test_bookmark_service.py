"""Flipbook Backend — Bookmark Service Unit Tests."""

import pytest
from unittest.mock import MagicMock
from bson import ObjectId
from pymongo.errors import PyMongoError

from flipbook.services.bookmark_service import BookmarkService
from flipbook.exceptions import StorageError


class TestBookmarkService:

    def setup_method(self):
        self.service = BookmarkService()

    @pytest.mark.asyncio
    async def test_create_bookmark(self, mock_db):
        oid = ObjectId()
        mock_db["bookmarks"].insert_one.return_value = MagicMock(inserted_id=oid)

        result = await self.service.create_bookmark(mock_db, 4, "Chapter 2")

        stored = mock_db["bookmarks"].insert_one.await_args.args[0]
        assert stored["pageIndex"] == 4
        assert stored["title"] == "Chapter 2"
        assert "createdAt" in stored
        assert result.id == str(oid)

    @pytest.mark.asyncio
    async def test_create_bookmark_without_title(self, mock_db):
        mock_db["bookmarks"].insert_one.return_value = MagicMock(inserted_id=ObjectId())

        result = await self.service.create_bookmark(mock_db, 0)

        assert result.title == ""

    @pytest.mark.asyncio
    async def test_list_bookmarks(self, mock_db, make_cursor):
        mock_db["bookmarks"].find.return_value = make_cursor([
            {"_id": ObjectId(), "pageIndex": 1, "title": "a"},
            {"_id": ObjectId(), "pageIndex": 1, "title": "b"},
        ])

        result = await self.service.list_bookmarks(mock_db)

        assert [b.title for b in result] == ["a", "b"]

    @pytest.mark.asyncio
    async def test_delete_bookmark_removes_one(self, mock_db):
        mock_db["bookmarks"].find_one_and_delete.return_value = {
            "_id": ObjectId(), "pageIndex": 1,
        }

        result = await self.service.delete_bookmark(mock_db, 1)

        assert result.deleted_count == 1
        assert result.message == "Bookmark deleted successfully"

    @pytest.mark.asyncio
    async def test_delete_missing_bookmark_is_not_an_error(self, mock_db):
        mock_db["bookmarks"].find_one_and_delete.return_value = None

        result = await self.service.delete_bookmark(mock_db, 99)

        assert result.deleted_count == 0

    @pytest.mark.asyncio
    async def test_create_bookmark_failure(self, mock_db):
        mock_db["bookmarks"].insert_one.side_effect = PyMongoError("not primary")

        with pytest.raises(StorageError, match="Failed to create bookmark"):
            await self.service.create_bookmark(mock_db, 0)
