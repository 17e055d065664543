"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Async connection management
  - ChatSessionModel: Session entity with embedded turns
  - chat_session_crud: CRUD operation singleton

Dependencies: sqlalchemy, helios.configs
System role: Database adapter providing persistent storage for chat sessions
"""

from helios.boundary.db.base import Base, TimestampMixin, UUIDMixin
from helios.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from helios.boundary.db.models.chat_session_model import ChatSessionModel
from helios.boundary.db.CRUD import BaseCRUD, ChatSessionCRUD, chat_session_crud

__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    # Connection
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    # Models
    "ChatSessionModel",
    # CRUD
    "BaseCRUD",
    "ChatSessionCRUD",
    "chat_session_crud",
]
