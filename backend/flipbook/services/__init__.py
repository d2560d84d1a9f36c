# Services package init
"""
Flipbook Backend — Services Layer
===================================

What:  The MongoDB queries behind each route.
How:   One stateless service per collection group, exposed as a module-level
       singleton. Every method takes the database handle as its first argument.

Service Inventory:
    - ImageService:      images collection (CRUD, bulk, per-field upserts, search)
    - AnalyticsService:  page and project view counters
    - BookmarkService:   bookmarks collection
    - ProjectService:    projects collection (shareId, visibility, view side effect)
    - share_id:          shareId generation and collision-retrying insert
"""
