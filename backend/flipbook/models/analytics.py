"""
Flipbook Backend — View Counter Documents
===========================================

What:  Shapes of the two view-counter collections.

    analytics       one document per pageIndex (page views)
    project_views   one document per shareId (project views)

Both are only ever written through an atomic upsert-with-increment, so these
models describe the stored shape and the insert-time defaults rather than
being instantiated per request. `timeSpent` is kept for compatibility with
existing page documents; nothing updates it.
"""

from datetime import datetime
from typing import Optional

from flipbook.models.base import DocumentModel


class PageAnalyticsDocument(DocumentModel):
    page_index: int
    views: int = 0
    time_spent: int = 0
    last_viewed: Optional[datetime] = None


class ProjectViewDocument(DocumentModel):
    share_id: str
    views: int = 0
    last_viewed: Optional[datetime] = None
