"""
Confession Board — Middleware Package
======================================

Cross-cutting concerns applied to every request.

Middleware Chain (request direction):
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

The access log runs inside the request-id middleware, so every line it
writes carries the id that is also returned in X-Request-ID.
"""
