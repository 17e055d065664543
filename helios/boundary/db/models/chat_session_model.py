"""
Chat session ORM model.

One row per session. Turns are embedded as an ordered JSON array so a session
is always fetched and replaced as a whole document.

Dependencies: sqlalchemy, helios.boundary.db.base, helios.core.conversation
System role: Durable storage of owned conversations
"""

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from helios.boundary.db.base import Base, TimestampMixin, UUIDMixin
from helios.core.conversation import Turn

TITLE_MAX_LENGTH = 255


class ChatSessionModel(Base, UUIDMixin, TimestampMixin):
    """
    Chat session ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        owner: Identifier of the owning user; every query is scoped by it
        title: Display title
        model: Gemini model identifier selected for the session
        turns: Ordered list of turn documents
            ``{role, content, attachments: [{fileName, mimeType}], createdAt}``
        created_at: Session creation timestamp (UTC)
        updated_at: Last modification timestamp (UTC)
    """

    __tablename__ = "chat_sessions"

    owner: Mapped[str] = mapped_column(
        String(128),
        nullable=False,
        index=True,
        doc="Owning user identifier",
    )
    title: Mapped[str] = mapped_column(
        String(TITLE_MAX_LENGTH),
        nullable=False,
        default="New Chat",
    )
    model: Mapped[str] = mapped_column(String(64), nullable=False)
    turns: Mapped[list] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        doc="Embedded turn documents, oldest first",
    )

    def load_turns(self) -> list[Turn]:
        """Parse the embedded turn documents."""
        return [Turn.from_document(doc) for doc in self.turns or []]
