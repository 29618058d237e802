"""
Aid Board Backend - Todo SQLAlchemy Model
==========================================

What:  ORM model for the `todos` table.
How:   Typed Mapped[...] columns give a static row → object mapping; a renamed
       column breaks the model instead of failing at lookup time.

Table:
    todos(id uuid PK, title text, created_at timestamptz default now())

    id is generated by the application (uuid4) before the INSERT.
    created_at has no Python-side default: the store assigns it.
"""

import uuid
from datetime import datetime

from sqlalchemy import Index, Text, text
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID
from sqlalchemy.orm import Mapped, mapped_column

from aidboard.database import Base


class Todo(Base):
    """A title plus the time it was recorded. Created, listed, never changed."""

    __tablename__ = "todos"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True)

    title: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("now()"),
    )

    __table_args__ = (
        Index("idx_todos_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Todo(id={self.id}, title='{self.title}')>"
