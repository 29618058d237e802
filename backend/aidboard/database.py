"""
Aid Board Backend - Database & Connection Pool
===============================================

What:  Async SQLAlchemy engine, session factory, declarative base and the
       FastAPI dependency that hands a session to each request.
How:   Database owns one async engine (asyncpg driver) and its connection
       pool. It is built in the application lifespan, stored on
       ``app.state.database`` and reached by handlers through
       get_db_session(); nothing in this module is created at import time.
Who:   main.py (lifecycle), routes (via Depends), schema_init.py (startup
       upgrade on a pooled connection).

Connection Pooling:
    pool_size=10, max_overflow=0: at most 10 connections checked out at once.
    pool_timeout:  an exhausted pool suspends the caller until a connection is
                   released, for up to DB_POOL_TIMEOUT seconds (default 3600).
    pool_pre_ping: validates connections before use (survives DB restarts).
    pool_recycle:  recycles connections every hour.
"""

import logging
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from aidboard.config import Settings
from aidboard.exceptions import DatabaseError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all ORM models; its metadata is Alembic's target."""
    pass


class Database:
    """
    The process's connection pool and session factory.

    Constructed explicitly and passed around; there is no module-level
    instance. Sessions use expire_on_commit=False so rows returned by
    INSERT/UPDATE ... RETURNING stay readable after the commit.
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self.session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        engine = create_async_engine(
            settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=0,
            pool_timeout=settings.db_pool_timeout,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
        logger.info(
            "Connection pool configured: host=%s size=%d",
            engine.url.host,
            settings.db_pool_size,
        )
        return cls(engine)

    async def check_connection(self) -> None:
        """
        Open one pooled connection and run SELECT 1.

        The engine connects lazily, so this is the first point at which a
        wrong host, bad credentials or a stopped server show up.

        Raises:
            DatabaseError: the store cannot be reached.
        """
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            raise DatabaseError(
                message="Could not connect to the database.",
                context={"host": self.engine.url.host, "error_type": type(e).__name__},
            ) from e

    async def dispose(self) -> None:
        """Close every pooled connection (application shutdown)."""
        await self.engine.dispose()


def get_database(request: Request) -> Database:
    """The Database attached to the running application."""
    return request.app.state.database


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Opens a session from the application's Database
        2. Yields it to the route handler
        3. On error: rolls back, then re-raises for the global handlers
        4. Always: closes the session (returns the connection to the pool)

    Services commit their own writes before returning, so a response is
    never sent for a row that has not been committed.
    """
    database = get_database(request)
    async with database.session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
