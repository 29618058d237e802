"""
Aid Board Backend - Service Request Service
============================================

What:  Data access for the help-request board: list, create, update status.
How:   One SQL statement per operation, on the session passed in by the
       route. Rows come back through RETURNING so the response is exactly
       what the store holds.
Who:   Called by routes/requests.py.

Status handling:
    create_request() never sends a status; the column default applies.
    update_status() overwrites status with whatever string it is given.

Missing rows:
    update_status() on an id with no row fails the single-row fetch
    (NoResultFound). It is reported like any other store failure, as
    DatabaseError → 500; callers cannot tell it apart from an outage.
"""

import logging
import uuid
from typing import List

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from aidboard.exceptions import DatabaseError
from aidboard.models.service_request import ServiceRequest
from aidboard.schemas.service_request import (
    ServiceRequestCreate,
    ServiceRequestResponse,
)

logger = logging.getLogger(__name__)


class RequestService:
    """Stateless service for the `requests` table."""

    async def list_requests(self, db: AsyncSession) -> List[ServiceRequestResponse]:
        """
        All service requests, newest first.

        Query:
            SELECT id, type, status, contact_person, contact_phone, address,
                   description, created_at
            FROM requests ORDER BY created_at DESC
        """
        try:
            result = await db.execute(
                select(ServiceRequest).order_by(ServiceRequest.created_at.desc())
            )
            rows = result.scalars().all()
        except Exception as e:
            logger.error("Database error listing requests: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not list requests.",
                context={"operation": "list_requests", "error_type": type(e).__name__},
            ) from e

        return [ServiceRequestResponse.model_validate(row) for row in rows]

    async def create_request(
        self,
        db: AsyncSession,
        payload: ServiceRequestCreate,
    ) -> ServiceRequestResponse:
        """
        Insert a request with a fresh uuid4, leaving status and created_at
        to the store, and return all eight columns.

        Query:
            INSERT INTO requests (id, type, contact_person, contact_phone,
                                  address, description)
            VALUES (...) RETURNING *
        """
        request_id = uuid.uuid4()
        try:
            result = await db.execute(
                insert(ServiceRequest)
                .values(
                    id=request_id,
                    type=payload.type,
                    contact_person=payload.contact_person,
                    contact_phone=payload.contact_phone,
                    address=payload.address,
                    description=payload.description,
                )
                .returning(ServiceRequest)
            )
            row = result.scalar_one()
            await db.commit()
        except Exception as e:
            logger.error("Database error creating request %s: %s", request_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create request.",
                context={"operation": "create_request", "request_id": str(request_id),
                         "error_type": type(e).__name__},
            ) from e

        logger.info("Request created: %s (type=%s, status=%s)", row.id, row.type, row.status)
        return ServiceRequestResponse.model_validate(row)

    async def update_status(
        self,
        db: AsyncSession,
        request_id: uuid.UUID,
        status: str,
    ) -> ServiceRequestResponse:
        """
        Overwrite the status of one request and return the updated row.

        Query:
            UPDATE requests SET status = :status WHERE id = :id RETURNING *

        Raises:
            DatabaseError: store failure, or no row with this id.
        """
        try:
            result = await db.execute(
                update(ServiceRequest)
                .where(ServiceRequest.id == request_id)
                .values(status=status)
                .returning(ServiceRequest)
            )
            row = result.scalar_one()
            await db.commit()
        except Exception as e:
            logger.error(
                "Database error updating status of request %s: %s",
                request_id, str(e), exc_info=True,
            )
            raise DatabaseError(
                message="Could not update request status.",
                context={"operation": "update_status", "request_id": str(request_id),
                         "error_type": type(e).__name__},
            ) from e

        logger.info("Request %s status set to %r", row.id, row.status)
        return ServiceRequestResponse.model_validate(row)


request_service = RequestService()
