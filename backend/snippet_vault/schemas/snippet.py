"""
Snippet Vault Backend - Pydantic Request/Response Schemas
==========================================================

What:  Pydantic models defining the JSON contract with the browser client.
How:   FastAPI validates request bodies against these models, serializes
       responses through them, and publishes them in the OpenAPI docs.

Wire names follow the client's camelCase (`createdAt`, `insertedId`); the
Python attributes stay snake_case and are mapped with aliases.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from snippet_vault.models.snippet import Snippet


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class SnippetCreate(BaseModel):
    """
    What:  Body of POST /snippets.
    How:   Every field is optional at the schema level so that a missing field
           and a blank field produce the same 400 response from the
           repository, instead of FastAPI's field-level 422. Unknown keys
           (including a client-supplied `id`) are ignored.
    """
    title: Optional[str] = Field(default=None, description="Snippet title (non-empty)")
    language: Optional[str] = Field(default=None, description="Free-form language tag, e.g. 'js'")
    code: Optional[str] = Field(default=None, description="Code body, stored verbatim")

    model_config = ConfigDict(extra="ignore")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class SnippetResponse(BaseModel):
    """
    What:  One snippet as returned by GET /snippets.
    Note:  `id` is opaque to the client; it is only ever sent back to delete.
    """
    id: str = Field(description="Opaque unique identifier")
    title: str
    language: str
    code: str
    created_at: Optional[datetime] = Field(
        default=None,
        alias="createdAt",
        description="Server-assigned creation time (UTC ISO 8601)",
    )

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_snippet(cls, snippet: Snippet) -> "SnippetResponse":
        return cls(
            id=snippet.id,
            title=snippet.title,
            language=snippet.language,
            code=snippet.code,
            created_at=snippet.created_at,
        )


class SnippetCreatedResponse(BaseModel):
    """Returned by POST /snippets with HTTP 201."""
    inserted_id: str = Field(alias="insertedId", description="Identifier of the new snippet")

    model_config = ConfigDict(populate_by_name=True)


class SnippetDeletedResponse(BaseModel):
    """Returned by DELETE /snippets/{id} with HTTP 200."""
    ok: bool = True
    message: str = "Snippet deleted"


class HealthResponse(BaseModel):
    """Returned by GET /health. Independent of database readiness."""
    ok: bool = True
    message: str = "Server is healthy"


class IndexResponse(BaseModel):
    """Returned by GET / as a pointer to the available endpoints."""
    message: str
    endpoints: List[str]


class ErrorResponse(BaseModel):
    """
    What:  Error body shared by every non-2xx response.

    Fields:
        error:      Machine-readable code (e.g. "validation_error", "not_found")
        message:    Human-readable description, always present
        details:    Optional extra context (validation failures only)
        request_id: Correlation ID matching the X-Request-ID header
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[Dict[str, Any]] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")
