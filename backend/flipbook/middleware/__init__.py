# Middleware package init
"""
Flipbook Backend — Middleware Package
=======================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: correlation ID for logs and error bodies
    2. Logging: one access line per request, tagged with the request ID
    3. GZip / CORS: FastAPI's stock middleware

    Responses travel back through the same chain in reverse, which is where
    the X-Request-ID header and the status/duration log line are added.
"""
