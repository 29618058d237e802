"""
Aid Board Backend - Todo Route Handlers
========================================

What:  GET /todos (list, newest first) and POST /todos (create).
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from aidboard.database import get_db_session
from aidboard.schemas.common import ErrorResponse
from aidboard.schemas.todo import TodoCreate, TodoResponse
from aidboard.services.todo_service import todo_service

router = APIRouter(prefix="/todos", tags=["Todos"])


@router.get(
    "",
    response_model=List[TodoResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List todos, newest first",
)
async def list_todos(
    db: AsyncSession = Depends(get_db_session),
) -> List[TodoResponse]:
    return await todo_service.list_todos(db)


@router.post(
    "",
    response_model=TodoResponse,
    status_code=status.HTTP_201_CREATED,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="Create a todo",
)
async def create_todo(
    payload: TodoCreate,
    db: AsyncSession = Depends(get_db_session),
) -> TodoResponse:
    """
    Store a new todo. The id is generated here and created_at by the store;
    both come back in the 201 body.
    """
    return await todo_service.create_todo(db, payload.title)
