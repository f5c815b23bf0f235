# Middleware package init
"""
Employees API — Middleware Package
====================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    Request ID runs first so the access log line and any error log line
    from the handler carry the same correlation ID.
"""
