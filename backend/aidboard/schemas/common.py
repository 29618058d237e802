"""
Aid Board Backend - Shared Schema Pieces
=========================================

What:  The camelCase base models used by every wire schema, and the error
       body returned by the global exception handlers.

Two bases:
    CamelModel          request bodies; only the camelCase names validate,
                        so {"contact_person": ...} is rejected with 422.
    CamelResponseModel  response bodies; also populated by Python field
                        name, which is what from_attributes reads off ORM
                        rows (row.contact_person).
"""

from typing import Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base for incoming wire schemas.

    Field names are snake_case in Python and lower camelCase on the wire
    (contact_person ↔ contactPerson).
    """

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": False,
    }


class CamelResponseModel(CamelModel):
    """Base for outgoing wire schemas, built straight from ORM rows."""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }


class ErrorResponse(BaseModel):
    """
    Error body for failures raised inside the service.

    Example:
        {
            "error": "server_error",
            "message": "internal server error",
            "request_id": "1f0c2a9b"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")
