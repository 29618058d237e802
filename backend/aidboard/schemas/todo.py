"""
Aid Board Backend - Todo Schemas
=================================

What:  Request and response bodies for /todos.
"""

import uuid
from datetime import datetime

from pydantic import Field

from aidboard.schemas.common import CamelModel, CamelResponseModel


class TodoCreate(CamelModel):
    """Body of POST /todos. Any string is a valid title, including ""."""
    title: str = Field(description="Free-text title")


class TodoResponse(CamelResponseModel):
    """A stored todo as returned by GET and POST /todos."""
    id: uuid.UUID = Field(description="Server-generated identifier")
    title: str
    created_at: datetime = Field(description="Set by the store on insert (RFC 3339, UTC)")
