"""
Session domain models and schemas.

Request/response schemas for session operations. Field names are exposed in
camelCase to match the stored turn documents.

Dependencies: pydantic
System role: Session API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from helios.boundary.db.models.chat_session_model import TITLE_MAX_LENGTH, ChatSessionModel
from helios.core.conversation import Turn


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class CreateSessionRequest(_CamelModel):
    """Request schema for creating a new session."""

    model: str | None = Field(
        default=None,
        description="Model identifier; the server default is used when omitted",
    )


class RenameSessionRequest(_CamelModel):
    """Request schema for renaming a session."""

    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH, description="New session title")


class AttachmentResponse(_CamelModel):
    """Attachment metadata recorded on a user turn."""

    file_name: str
    mime_type: str


class TurnResponse(_CamelModel):
    """One stored turn."""

    role: str
    content: str
    attachments: list[AttachmentResponse] = Field(default_factory=list)
    created_at: datetime

    @classmethod
    def from_turn(cls, turn: Turn) -> "TurnResponse":
        return cls(
            role=turn.role.value,
            content=turn.content,
            attachments=[
                AttachmentResponse(file_name=a.file_name, mime_type=a.mime_type)
                for a in turn.attachments
            ],
            created_at=turn.created_at,
        )


class SessionSummaryResponse(_CamelModel):
    """Session listing entry without turns."""

    id: uuid.UUID
    title: str
    model: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, record: ChatSessionModel) -> "SessionSummaryResponse":
        return cls(
            id=record.id,
            title=record.title,
            model=record.model,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )


class SessionResponse(SessionSummaryResponse):
    """Full session with its ordered turns."""

    turns: list[TurnResponse] = Field(default_factory=list)

    @classmethod
    def from_model(cls, record: ChatSessionModel) -> "SessionResponse":
        return cls(
            id=record.id,
            title=record.title,
            model=record.model,
            created_at=record.created_at,
            updated_at=record.updated_at,
            turns=[TurnResponse.from_turn(t) for t in record.load_turns()],
        )
