"""
Aid Board Backend - Service Request Route Handlers
===================================================

What:  GET/POST /api/requests and PATCH /api/requests/{id}/status.
Who:   Called by the board's front end.

Path validation:
    {request_id} is declared as UUID, so FastAPI answers 422 for anything
    that does not parse before the handler runs.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from aidboard.database import get_db_session
from aidboard.schemas.common import ErrorResponse
from aidboard.schemas.service_request import (
    ServiceRequestCreate,
    ServiceRequestResponse,
    StatusUpdate,
)
from aidboard.services.request_service import request_service

router = APIRouter(prefix="/api", tags=["Requests"])


@router.get(
    "/requests",
    response_model=List[ServiceRequestResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List service requests, newest first",
)
async def list_requests(
    db: AsyncSession = Depends(get_db_session),
) -> List[ServiceRequestResponse]:
    return await request_service.list_requests(db)


@router.post(
    "/requests",
    response_model=ServiceRequestResponse,
    status_code=status.HTTP_201_CREATED,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="Post a new service request",
)
async def create_request(
    payload: ServiceRequestCreate,
    db: AsyncSession = Depends(get_db_session),
) -> ServiceRequestResponse:
    """The response carries the store-assigned id, status and createdAt."""
    return await request_service.create_request(db, payload)


@router.patch(
    "/requests/{request_id}/status",
    response_model=ServiceRequestResponse,
    responses={
        # No separate 404: an unknown id fails like any other store error.
        500: {"description": "Server error or unknown id", "model": ErrorResponse},
    },
    summary="Overwrite the status of a service request",
)
async def update_request_status(
    request_id: UUID,
    payload: StatusUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> ServiceRequestResponse:
    return await request_service.update_status(db, request_id, payload.status)
