"""
Snippet Vault Backend - Custom Exception Hierarchy
===================================================

What:  Application-specific exceptions for the failure kinds the API reports.
How:   Each exception carries a user-facing message and an optional context
       dict. Global handlers (registered in main.py) turn them into JSON
       responses with the matching status code.
Who:   Raised by the repository, the connection layer and route handlers.

Exception Hierarchy:
    SnippetVaultError (base)         → 500 Internal Server Error
    ├── ValidationError              → 400 Bad Request
    ├── InvalidIdentifierError       → 400 Bad Request
    ├── NotFoundError                → 404 Not Found
    └── StorageUnavailableError      → 503 Service Unavailable

Only `message` ever reaches the client. `context` is for server-side logs.
"""

from typing import Any, Dict, Optional


class SnippetVaultError(Exception):
    """
    Base exception for all Snippet Vault application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(SnippetVaultError):
    """
    Raised when a create request is missing a field or a field is blank.

    HTTP: 400 Bad Request. Never logged as a server fault.

    Example response:
        {
            "error": "validation_error",
            "message": "title, language, and code are required",
            "details": {"fields": ["title"]}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class InvalidIdentifierError(SnippetVaultError):
    """
    Raised when a client-supplied id is not a well-formed ObjectId.

    HTTP: 400 Bad Request. Distinct from NotFoundError: the request itself is
    malformed, rather than pointing at a record that is gone.
    """

    def __init__(
        self,
        identifier: Optional[str] = None,
        message: str = "Invalid snippet id",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if identifier is not None:
            ctx["identifier"] = identifier
        super().__init__(message=message, context=ctx)
        self.identifier = identifier


class NotFoundError(SnippetVaultError):
    """
    Raised when a well-formed id matches no stored record.

    HTTP: 404 Not Found.
    """

    def __init__(
        self,
        resource: str = "Snippet",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class StorageUnavailableError(SnippetVaultError):
    """
    Raised when MongoDB is unreachable, timed out, or not connected yet.

    HTTP: 503 Service Unavailable. The process keeps running; retrying is left
    to the caller.
    """

    def __init__(
        self,
        message: str = "Database not connected yet. Try again in a moment.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
