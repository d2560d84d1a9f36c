"""
Flipbook Backend — Share ID Generation
========================================

What:  Builds the public identifier of a project and inserts the project under it.
How:   shareId = 10 random base-36 chars + base-36 millisecond timestamp,
       e.g. "k3j9x0a2qzmg8w1c9d". The `projects.shareId` unique index is the
       real guarantee: an insert rejected with a duplicate-key error gets a
       fresh id and is retried by tenacity.

Retry Strategy:
    - Only DuplicateKeyError is retried; every other store error propagates
    - No wait between attempts (a new random fragment is enough)
    - After SHARE_ID_MAX_ATTEMPTS the last DuplicateKeyError is re-raised
"""

import logging
import secrets
import string
from datetime import datetime
from typing import Any, Dict, Optional

from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo.errors import DuplicateKeyError
from tenacity import (
    retry,
    stop_after_attempt,
    retry_if_exception_type,
    before_sleep_log,
)

from flipbook.config import settings
from flipbook.models.base import utcnow

logger = logging.getLogger(__name__)

BASE36_ALPHABET = string.digits + string.ascii_lowercase
RANDOM_FRAGMENT_LENGTH = 10


def to_base36(value: int) -> str:
    """Non-negative integer to lowercase base-36."""
    if value < 0:
        raise ValueError("base-36 encoding expects a non-negative integer")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(BASE36_ALPHABET[remainder])
    return "".join(reversed(digits))


def generate_share_id(now: Optional[datetime] = None) -> str:
    now = now or utcnow()
    random_fragment = "".join(
        secrets.choice(BASE36_ALPHABET) for _ in range(RANDOM_FRAGMENT_LENGTH)
    )
    timestamp_fragment = to_base36(int(now.timestamp() * 1000))
    return random_fragment + timestamp_fragment


@retry(
    retry=retry_if_exception_type(DuplicateKeyError),
    stop=stop_after_attempt(settings.share_id_max_attempts),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)
async def insert_with_share_id(
    collection: AsyncIOMotorCollection, document: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Assign a fresh shareId to `document` and insert it.

    The document is mutated in place (shareId and _id set) and returned.

    Raises:
        DuplicateKeyError: every attempt collided.
        pymongo.errors.PyMongoError: any other store failure (not retried).
    """
    document.pop("_id", None)
    document["shareId"] = generate_share_id()
    result = await collection.insert_one(document)
    document["_id"] = result.inserted_id
    return document
