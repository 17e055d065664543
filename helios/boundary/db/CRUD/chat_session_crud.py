"""
Chat session CRUD operations.

Owner-scoped Create, Read, Update, Delete operations for ChatSessionModel.
Every read and write is keyed by session id plus owner so a session is only
visible to the user who created it.

Dependencies: sqlalchemy, helios.boundary.db.models, helios.core.conversation
System role: Session Store persistence operations
"""

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import defer

from helios.boundary.db.CRUD.base_crud import BaseCRUD
from helios.boundary.db.models.chat_session_model import ChatSessionModel
from helios.core.conversation import Turn


class ChatSessionCRUD(BaseCRUD[ChatSessionModel]):
    """CRUD operations for ChatSessionModel scoped by owner."""

    def __init__(self) -> None:
        """Initialize ChatSessionCRUD with ChatSessionModel."""
        super().__init__(ChatSessionModel)

    async def create_for_owner(
        self,
        session: AsyncSession,
        owner: str,
        title: str,
        model: str,
    ) -> ChatSessionModel:
        """
        Create an empty session for an owner.

        Args:
            session: Async database session
            owner: Owning user identifier
            title: Initial display title
            model: Selected model identifier

        Returns:
            ChatSessionModel: New session with no turns
        """
        return await self.create(session, owner=owner, title=title, model=model, turns=[])

    async def get_for_owner(
        self,
        session: AsyncSession,
        id: UUID,
        owner: str,
    ) -> ChatSessionModel | None:
        """
        Fetch the full session document.

        Args:
            session: Async database session
            id: Session UUID
            owner: Owning user identifier

        Returns:
            ChatSessionModel if it exists and belongs to owner, None otherwise
        """
        return await self.get_one(
            session,
            ChatSessionModel.id == id,
            ChatSessionModel.owner == owner,
        )

    async def list_for_owner(
        self,
        session: AsyncSession,
        owner: str,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[ChatSessionModel]:
        """
        List an owner's sessions, most recently updated first.

        The turns column is deferred; callers must not touch ``turns``
        on the returned rows.
        """
        return await self.get_many(
            session,
            ChatSessionModel.owner == owner,
            order_by=ChatSessionModel.updated_at.desc(),
            options=(defer(ChatSessionModel.turns),),
            limit=limit,
            offset=offset,
        )

    async def rename_for_owner(
        self,
        session: AsyncSession,
        id: UUID,
        owner: str,
        title: str,
    ) -> ChatSessionModel | None:
        """
        Set a session's title.

        Returns:
            Updated ChatSessionModel, None if not found for owner
        """
        return await self.update_where(
            session,
            ChatSessionModel.id == id,
            ChatSessionModel.owner == owner,
            title=title,
        )

    async def replace_turns(
        self,
        session: AsyncSession,
        id: UUID,
        owner: str,
        turns: Sequence[Turn],
        title: str,
    ) -> ChatSessionModel | None:
        """
        Replace a session's turn list and title in one write.

        Args:
            session: Async database session
            id: Session UUID
            owner: Owning user identifier
            turns: Complete ordered turn list to store
            title: Title to store alongside the turns

        Returns:
            Updated ChatSessionModel, None if not found for owner
        """
        return await self.update_where(
            session,
            ChatSessionModel.id == id,
            ChatSessionModel.owner == owner,
            turns=[turn.to_document() for turn in turns],
            title=title,
        )

    async def delete_for_owner(
        self,
        session: AsyncSession,
        id: UUID,
        owner: str,
    ) -> bool:
        """
        Delete a session.

        Returns:
            True if a session was deleted, False if not found for owner
        """
        return await self.delete_where(
            session,
            ChatSessionModel.id == id,
            ChatSessionModel.owner == owner,
        )


chat_session_crud = ChatSessionCRUD()
