"""
Aid Board Backend - Health Check Route
=======================================

What:  Liveness endpoint for load balancers and container health checks.
How:   Always answers 200 with the plain-text body "ok". It does not touch
       the database, so it keeps answering while the store is unreachable.
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_class=PlainTextResponse,
    summary="Liveness check",
)
async def health_check() -> PlainTextResponse:
    return PlainTextResponse("ok")
