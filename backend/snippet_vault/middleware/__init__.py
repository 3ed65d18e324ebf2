# Middleware package init
"""
Snippet Vault Backend - Middleware Package
===========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    Request ID runs first so the access log line carries the ID. Responses
    pass back through the chain in reverse order.
"""
