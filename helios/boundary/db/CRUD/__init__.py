"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from helios.boundary.db.CRUD import chat_session_crud

    session = await chat_session_crud.get_for_owner(db, session_id, owner)
"""

from helios.boundary.db.CRUD.base_crud import BaseCRUD
from helios.boundary.db.CRUD.chat_session_crud import ChatSessionCRUD, chat_session_crud

__all__ = [
    "BaseCRUD",
    "ChatSessionCRUD",
    "chat_session_crud",
]
