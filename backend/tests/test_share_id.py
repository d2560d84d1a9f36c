"""
Flipbook Backend — Share ID Tests
===================================

What we test:
    ✅ Base-36 encoding
    ✅ shareId = 10 random chars + base-36 millisecond timestamp
    ✅ Duplicate-key collisions get a fresh id and are retried
    ✅ Other store errors are not retried
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from pymongo.errors import DuplicateKeyError, PyMongoError

from flipbook.config import settings
from flipbook.services.share_id import (
    BASE36_ALPHABET,
    generate_share_id,
    insert_with_share_id,
    to_base36,
)


class TestBase36:

    @pytest.mark.parametrize(
        "value,expected",
        [(0, "0"), (9, "9"), (10, "a"), (35, "z"), (36, "10"), (1295, "zz")],
    )
    def test_to_base36(self, value, expected):
        assert to_base36(value) == expected

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            to_base36(-1)


class TestGenerateShareId:

    def test_shape(self):
        now = datetime(2026, 10, 19, 8, 30, tzinfo=timezone.utc)
        share_id = generate_share_id(now)

        timestamp = to_base36(int(now.timestamp() * 1000))
        assert share_id.endswith(timestamp)
        assert len(share_id) == 10 + len(timestamp)
        assert all(c in BASE36_ALPHABET for c in share_id)

    def test_random_fragment_differs(self):
        now = datetime(2026, 10, 19, tzinfo=timezone.utc)
        assert generate_share_id(now) != generate_share_id(now)


class TestInsertWithShareId:

    @pytest.mark.asyncio
    async def test_inserts_with_share_id(self):
        oid = ObjectId()
        collection = MagicMock()
        collection.insert_one = AsyncMock(return_value=MagicMock(inserted_id=oid))

        document = await insert_with_share_id(collection, {"name": "x"})

        assert document["_id"] == oid
        assert len(document["shareId"]) >= 10
        collection.insert_one.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_duplicate_key_retries_with_new_id(self):
        """A collision on the unique index should retry under a different shareId."""
        attempted = []

        async def insert_one(document):
            attempted.append(document["shareId"])
            if len(attempted) == 1:
                raise DuplicateKeyError("E11000 duplicate key error")
            return MagicMock(inserted_id=ObjectId())

        collection = MagicMock()
        collection.insert_one = AsyncMock(side_effect=insert_one)

        document = await insert_with_share_id(collection, {"name": "x"})

        assert len(attempted) == 2
        assert attempted[0] != attempted[1]
        assert document["shareId"] == attempted[1]

    @pytest.mark.asyncio
    async def test_gives_up_after_max_attempts(self):
        collection = MagicMock()
        collection.insert_one = AsyncMock(side_effect=DuplicateKeyError("E11000"))

        with pytest.raises(DuplicateKeyError):
            await insert_with_share_id(collection, {"name": "x"})

        assert collection.insert_one.await_count == settings.share_id_max_attempts

    @pytest.mark.asyncio
    async def test_other_errors_not_retried(self):
        collection = MagicMock()
        collection.insert_one = AsyncMock(side_effect=PyMongoError("network"))

        with pytest.raises(PyMongoError):
            await insert_with_share_id(collection, {"name": "x"})

        assert collection.insert_one.await_count == 1
