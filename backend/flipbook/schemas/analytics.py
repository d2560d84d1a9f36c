"""
Flipbook Backend — Analytics Schemas
======================================

What:  Request/response shapes for page view tracking and project view counts.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from flipbook.schemas.common import CamelModel, ObjectIdStr, StoredDocument


class PageViewCreate(CamelModel):
    # Lax int: "3" is accepted and stored as 3
    page_index: int


class PageAnalyticsResponse(StoredDocument):
    page_index: int
    views: int = 0
    time_spent: int = 0
    last_viewed: Optional[datetime] = None


class ProjectViewResponse(CamelModel):
    """
    View counter for one project.

    id is absent when the project exists but has never been viewed; views is 0.
    """
    id: Optional[ObjectIdStr] = Field(default=None, alias="_id")
    share_id: str
    views: int = 0
    last_viewed: Optional[datetime] = None
