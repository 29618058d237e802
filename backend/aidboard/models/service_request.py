"""
Aid Board Backend - Service Request SQLAlchemy Model
=====================================================

What:  ORM model for the `requests` table: one row per help request posted
       to the board (volunteers needed, supplies needed, ...).
How:   Storage names are snake_case (contact_person); the Pydantic schemas
       expose them as camelCase (contactPerson).

Table:
    requests(id uuid PK, type text, status text default '待處理',
             contact_person text, contact_phone text, address text,
             description text, created_at timestamptz default now())

Status is free text. The application never supplies it on INSERT, so new
rows always carry the schema default, and PATCH overwrites it verbatim.
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import Index, Text, text
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID
from sqlalchemy.orm import Mapped, mapped_column

from aidboard.database import Base


class RequestStatus(str, enum.Enum):
    """Status values used by the board's client. Not enforced by the API."""

    NEW = "待處理"
    IN_PROGRESS = "處理中"
    COMPLETED = "已完成"


class RequestType(str, enum.Enum):
    """Request categories used by the board's client. Not enforced by the API."""

    VOLUNTEER = "志工人力"
    SUPPLY = "物資需求"


class ServiceRequest(Base):
    """
    A citizen service request.

    Lifecycle:
        1. Created via POST /api/requests (status = schema default)
        2. Status overwritten via PATCH /api/requests/{id}/status, any string
        3. Never deleted
    """

    __tablename__ = "requests"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True)

    type: Mapped[str] = mapped_column(Text, nullable=False)

    status: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        server_default=text(f"'{RequestStatus.NEW.value}'"),
    )

    contact_person: Mapped[str] = mapped_column(Text, nullable=False)
    contact_phone: Mapped[str] = mapped_column(Text, nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("now()"),
    )

    __table_args__ = (
        Index("idx_requests_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return (
            f"<ServiceRequest(id={self.id}, type='{self.type}', "
            f"status='{self.status}')>"
        )
