"""
Snippet Vault Backend - Application Package Initializer
=======================================================

What: Marks the `snippet_vault` directory as a Python package.
Who:  Used by uvicorn (`uvicorn snippet_vault.main:app`), the console entry
      point, and pytest.

Architecture Note:
    The backend is a thin layered service:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns, status codes
    ├─────────────────────────────────────┤
    │        Snippet Repository           │  ← Validation, ObjectId mapping
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← Domain record + Pydantic contracts
    ├─────────────────────────────────────┤
    │   MongoConnection (Persistence)     │  ← Motor client, ready gate
    └─────────────────────────────────────┘

    Routes never talk to the collection directly, and the repository never
    knows about HTTP.
"""

__version__ = "1.0.0"
