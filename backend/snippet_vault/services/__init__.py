# Services package init
"""
Snippet Vault Backend - Services Layer
=======================================

What:  Persistence logic sitting between routes (HTTP) and MongoDB.
How:   Services are injected into routes via FastAPI's dependency injection.

Service Inventory:
    - SnippetRepository: list, create and delete snippets; ObjectId parsing
"""
