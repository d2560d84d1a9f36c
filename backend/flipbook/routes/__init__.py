# Routes package init
"""
Flipbook Backend — API Routes Package
=======================================

Route Inventory:
    - images.py:     POST/GET/DELETE /api/images, POST/DELETE /api/images/bulk,
                     PUT /api/images/{pageIndex}/text|metadata|alt, GET /api/search
    - analytics.py:  POST /api/analytics/view, GET /api/analytics
    - bookmarks.py:  POST/GET /api/bookmarks, DELETE /api/bookmarks/{pageIndex}
    - projects.py:   /api/projects and /api/projects/{shareId}[/analytics]
    - health.py:     GET /health

Routes stay thin: parse the request, call one service method, return its
result. Status codes for errors come from the exception handlers in main.py.
"""
