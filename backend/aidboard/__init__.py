"""
Aid Board Backend - Application Package
========================================

What:  HTTP service for the mutual-aid request board: a todo list and a
       list of citizen service requests (volunteers, supplies) backed by
       PostgreSQL.
Who:   Imported by uvicorn (`aidboard.main:app`), Alembic, and pytest.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Data Access)      │  ← one SQL statement per operation
    ├─────────────────────────────────────┤
    │       Models & Schemas (Mapping)    │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Connection Pool)   │  ← Async SQLAlchemy engine
    └─────────────────────────────────────┘
"""

__version__ = "0.1.0"
