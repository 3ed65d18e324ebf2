# Routes package init
"""
Snippet Vault Backend - API Routes Package
===========================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - snippets.py: GET    /snippets        (list all snippets)
                   POST   /snippets        (create a snippet)
                   DELETE /snippets/{id}   (delete a snippet)
    - health.py:   GET    /health          (service health check)
                   GET    /                (API index)

Routes stay thin: read the request, call the repository, return a schema.
Status-code mapping for failures lives in the global exception handlers.
"""
