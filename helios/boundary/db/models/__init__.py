"""ORM models."""

from helios.boundary.db.models.chat_session_model import TITLE_MAX_LENGTH, ChatSessionModel

__all__ = ["ChatSessionModel", "TITLE_MAX_LENGTH"]
