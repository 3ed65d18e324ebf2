"""
Snippet Vault Backend - Health Check and Index Routes
======================================================

What:  GET /health for probes and GET / as a small index of the API.
How:   Neither route touches MongoDB. /health answers while the process is
       running, whether or not the database connection is ready yet.
Who:   Docker health checks, load balancers, and people opening the API in a
       browser.
"""

from fastapi import APIRouter

from snippet_vault.schemas.snippet import HealthResponse, IndexResponse

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Reports that the server process is up. Does not probe the database.",
)
async def health_check() -> HealthResponse:
    return HealthResponse(ok=True, message="Server is healthy")


@router.get(
    "/",
    response_model=IndexResponse,
    summary="API index",
)
async def index() -> IndexResponse:
    return IndexResponse(
        message="Snippet Vault API is running",
        endpoints=["/health", "/snippets"],
    )
