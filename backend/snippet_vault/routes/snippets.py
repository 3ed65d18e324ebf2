"""
Snippet Vault Backend - Snippet Route Handlers
===============================================

What:  GET /snippets (list), POST /snippets (create), DELETE /snippets/{id}.
How:   Each handler receives a SnippetRepository through Depends(). The
       dependency chain checks the connection's ready gate first, so every
       handler here answers 503 while MongoDB is not connected.
Who:   Called by the browser client, which re-fetches the list after every
       create and delete.

Status codes:
    GET    /snippets        200 | 503
    POST   /snippets        201 | 400 | 503
    DELETE /snippets/{id}   200 | 400 | 404 | 503

Routes never build error responses themselves. They raise the typed
exceptions from snippet_vault.exceptions and the global handlers in main.py
produce the JSON body.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends

from snippet_vault.exceptions import InvalidIdentifierError, NotFoundError
from snippet_vault.schemas.snippet import (
    ErrorResponse,
    SnippetCreate,
    SnippetCreatedResponse,
    SnippetDeletedResponse,
    SnippetResponse,
)
from snippet_vault.services.snippet_repository import (
    DeleteOutcome,
    SnippetRepository,
    get_snippet_repository,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/snippets", tags=["Snippets"])


@router.get(
    "",
    response_model=List[SnippetResponse],
    responses={
        503: {"description": "Database not ready or unreachable", "model": ErrorResponse},
    },
    summary="List all snippets",
    description="Returns every stored snippet. No filtering or pagination on the server.",
)
async def list_snippets(
    repository: SnippetRepository = Depends(get_snippet_repository),
) -> List[SnippetResponse]:
    snippets = await repository.list_all()
    return [SnippetResponse.from_snippet(snippet) for snippet in snippets]


@router.post(
    "",
    status_code=201,
    response_model=SnippetCreatedResponse,
    responses={
        400: {"description": "Missing or empty title, language or code", "model": ErrorResponse},
        503: {"description": "Database not ready or unreachable", "model": ErrorResponse},
    },
    summary="Create a snippet",
    description=(
        "Stores a new snippet. title, language and code must be non-empty after "
        "trimming. code is stored as sent. The server assigns the id and createdAt."
    ),
)
async def create_snippet(
    payload: SnippetCreate,
    repository: SnippetRepository = Depends(get_snippet_repository),
) -> SnippetCreatedResponse:
    """
    Create a snippet from the request body.

    Any `id` the client sends is ignored; identifiers come from MongoDB only.
    """
    inserted_id = await repository.create(
        title=payload.title,
        language=payload.language,
        code=payload.code,
    )
    logger.info("Snippet created: %s", inserted_id)
    return SnippetCreatedResponse(inserted_id=inserted_id)


@router.delete(
    "/{snippet_id}",
    response_model=SnippetDeletedResponse,
    responses={
        400: {"description": "Malformed snippet id", "model": ErrorResponse},
        404: {"description": "No snippet with this id", "model": ErrorResponse},
        503: {"description": "Database not ready or unreachable", "model": ErrorResponse},
    },
    summary="Delete a snippet by id",
)
async def delete_snippet(
    snippet_id: str,
    repository: SnippetRepository = Depends(get_snippet_repository),
) -> SnippetDeletedResponse:
    """
    Delete one snippet.

    Maps the repository outcome:
        DELETED            → 200
        INVALID_IDENTIFIER → InvalidIdentifierError (400)
        NOT_FOUND          → NotFoundError (404)
    """
    outcome = await repository.delete_by_id(snippet_id)

    if outcome is DeleteOutcome.INVALID_IDENTIFIER:
        raise InvalidIdentifierError(identifier=snippet_id)
    if outcome is DeleteOutcome.NOT_FOUND:
        raise NotFoundError(resource="Snippet", resource_id=snippet_id)

    logger.info("Snippet deleted: %s", snippet_id)
    return SnippetDeletedResponse()
