"""
Aid Board Backend - Service Request Schemas
============================================

What:  Request and response bodies for /api/requests.
How:   Field names follow storage (contact_person); the CamelModel base
       renames them on the wire (contactPerson).

Payloads are only checked for shape: every field must be present and be a
string. Status values are recorded verbatim; there is no transition check.
"""

import uuid
from datetime import datetime

from pydantic import Field

from aidboard.models.service_request import RequestStatus, RequestType
from aidboard.schemas.common import CamelModel, CamelResponseModel


class ServiceRequestCreate(CamelModel):
    """Body of POST /api/requests. Status is not accepted here."""
    type: str = Field(examples=[RequestType.VOLUNTEER.value, RequestType.SUPPLY.value])
    contact_person: str
    contact_phone: str
    address: str
    description: str


class StatusUpdate(CamelModel):
    """Body of PATCH /api/requests/{id}/status."""
    status: str = Field(
        description="New status, stored as given",
        examples=[RequestStatus.IN_PROGRESS.value, RequestStatus.COMPLETED.value],
    )


class ServiceRequestResponse(CamelResponseModel):
    """A stored service request with all eight columns."""
    id: uuid.UUID
    type: str
    status: str = Field(description=f"Defaults to '{RequestStatus.NEW.value}' on creation")
    contact_person: str
    contact_phone: str
    address: str
    description: str
    created_at: datetime
