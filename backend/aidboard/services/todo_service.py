"""
Aid Board Backend - Todo Service
=================================

What:  Data access for the todo list: list newest-first, create.
How:   Each operation runs exactly one SQL statement on the session it is
       given and maps the ORM row(s) to response schemas.
Who:   Called by routes/todos.py with a session from get_db_session().

Error Handling:
    Any failure while talking to the store is logged with full detail and
    re-raised as DatabaseError, which the global handler turns into a
    generic 500.
"""

import logging
import uuid
from typing import List

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from aidboard.exceptions import DatabaseError
from aidboard.models.todo import Todo
from aidboard.schemas.todo import TodoResponse

logger = logging.getLogger(__name__)


class TodoService:
    """Stateless; the session (and through it the pool) is passed per call."""

    async def list_todos(self, db: AsyncSession) -> List[TodoResponse]:
        """
        All todos, newest first.

        Query:
            SELECT id, title, created_at FROM todos ORDER BY created_at DESC

        Returns an empty list when the table is empty.
        """
        try:
            result = await db.execute(
                select(Todo).order_by(Todo.created_at.desc())
            )
            todos = result.scalars().all()
        except Exception as e:
            logger.error("Database error listing todos: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not list todos.",
                context={"operation": "list_todos", "error_type": type(e).__name__},
            ) from e

        return [TodoResponse.model_validate(todo) for todo in todos]

    async def create_todo(self, db: AsyncSession, title: str) -> TodoResponse:
        """
        Insert a todo with a fresh uuid4 and return the stored row.

        Query:
            INSERT INTO todos (id, title) VALUES (:id, :title)
            RETURNING id, title, created_at

        created_at comes back from the store; it is never set here.
        """
        todo_id = uuid.uuid4()
        try:
            result = await db.execute(
                insert(Todo).values(id=todo_id, title=title).returning(Todo)
            )
            todo = result.scalar_one()
            await db.commit()
        except Exception as e:
            logger.error("Database error creating todo %s: %s", todo_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create todo.",
                context={"operation": "create_todo", "todo_id": str(todo_id),
                         "error_type": type(e).__name__},
            ) from e

        logger.info("Todo created: %s", todo.id)
        return TodoResponse.model_validate(todo)


todo_service = TodoService()
