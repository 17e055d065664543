"""
Session service orchestrator.

Owner-scoped session lifecycle: create, list, fetch, rename and delete.
Every mutation commits its own transaction.

Dependencies: sqlalchemy, helios.boundary.db.CRUD, helios.configs
System role: Session use case orchestration
"""

import logging
from collections.abc import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from helios.boundary.db.CRUD.chat_session_crud import chat_session_crud
from helios.boundary.db.models.chat_session_model import ChatSessionModel
from helios.configs.gemini import GeminiSettings
from helios.core.exceptions import SessionNotFoundError, UnsupportedModelError, ValidationError

logger = logging.getLogger(__name__)


class SessionService:
    """Session service orchestrator."""

    def __init__(self, db: AsyncSession, config: GeminiSettings) -> None:
        """
        Initialize session service with async database session.

        Args:
            db: Async SQLAlchemy session
            config: Provider settings (model allow-list, default title)
        """
        self.db = db
        self.config = config

    async def create_session(self, owner: str, model: str | None = None) -> ChatSessionModel:
        """
        Create an empty session with the default title.

        Args:
            owner: Owning user identifier
            model: Requested model; the configured default when omitted

        Returns:
            ChatSessionModel: Created session

        Raises:
            UnsupportedModelError: If the model is not in the allow-list
        """
        model = model or self.config.default_model
        if model not in self.config.allowed_models:
            raise UnsupportedModelError(model, self.config.allowed_models)

        record = await chat_session_crud.create_for_owner(
            self.db,
            owner=owner,
            title=self.config.default_title,
            model=model,
        )
        await self.db.commit()
        logger.info(
            "Session created",
            extra={"session_id": str(record.id), "model": model},
        )
        return record

    async def list_sessions(
        self,
        owner: str,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[ChatSessionModel]:
        """List an owner's sessions, most recently updated first."""
        return await chat_session_crud.list_for_owner(
            self.db, owner, limit=limit, offset=offset
        )

    async def get_session(self, session_id: UUID, owner: str) -> ChatSessionModel:
        """
        Get a session with its full turn history.

        Raises:
            SessionNotFoundError: If the session does not exist for this owner
        """
        record = await chat_session_crud.get_for_owner(self.db, session_id, owner)
        if record is None:
            raise SessionNotFoundError(str(session_id))
        return record

    async def rename_session(self, session_id: UUID, owner: str, title: str) -> ChatSessionModel:
        """
        Rename a session.

        Args:
            session_id: Session UUID
            owner: Owning user identifier
            title: New title; surrounding whitespace is stripped

        Returns:
            ChatSessionModel: Updated session

        Raises:
            ValidationError: If the title is blank
            SessionNotFoundError: If the session does not exist for this owner
        """
        title = title.strip()
        if not title:
            raise ValidationError("Title must not be empty", field="title")

        record = await chat_session_crud.rename_for_owner(self.db, session_id, owner, title)
        if record is None:
            raise SessionNotFoundError(str(session_id))
        await self.db.commit()
        logger.info("Session renamed", extra={"session_id": str(session_id)})
        return record

    async def delete_session(self, session_id: UUID, owner: str) -> None:
        """
        Delete a session and its history.

        Raises:
            SessionNotFoundError: If the session does not exist for this owner
        """
        deleted = await chat_session_crud.delete_for_owner(self.db, session_id, owner)
        if not deleted:
            raise SessionNotFoundError(str(session_id))
        await self.db.commit()
        logger.info("Session deleted", extra={"session_id": str(session_id)})
