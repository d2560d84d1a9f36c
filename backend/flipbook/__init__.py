"""
Flipbook Backend — Application Package Initializer
===================================================

What: Marks the `flipbook` directory as a Python package.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    This backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Store Calls)      │  ← one or two queries per operation
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← stored documents + API contracts
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Motor client and collections
    └─────────────────────────────────────┘

    - Routes handle status codes and request parsing, then delegate to services
    - Services own the MongoDB queries and can be tested with mocked collections
    - Models describe what is stored; Schemas describe what crosses the wire
    - The database layer owns the client lifecycle and index creation
"""

__version__ = "1.0.0"
