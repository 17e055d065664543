"""
Stored conversation turns and attachment records.

A Turn is the durable unit of a session's history. Attachments are stored
as metadata only; their binary payload lives on SubmittedAttachment for the
duration of a single request.

Dependencies: dataclasses
System role: Persisted conversation shape and its document mapping
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class Role(str, Enum):
    """Author of a turn."""

    USER = "user"
    MODEL = "model"


@dataclass(frozen=True)
class AttachmentMeta:
    """Descriptive record of a file sent with a user turn."""

    file_name: str
    mime_type: str

    def to_document(self) -> dict[str, str]:
        return {"fileName": self.file_name, "mimeType": self.mime_type}

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "AttachmentMeta":
        return cls(
            file_name=str(doc.get("fileName", "")),
            mime_type=str(doc.get("mimeType", "")),
        )


@dataclass(frozen=True)
class SubmittedAttachment:
    """
    File uploaded with the current submission.

    Attributes:
        file_name: Original client-side file name
        mime_type: Declared MIME type
        data: Raw payload, inlined into the provider request and then dropped
    """

    file_name: str
    mime_type: str
    data: bytes = field(repr=False)

    @property
    def meta(self) -> AttachmentMeta:
        return AttachmentMeta(file_name=self.file_name, mime_type=self.mime_type)


@dataclass(frozen=True)
class Turn:
    """
    One role-tagged message in a session.

    Attributes:
        role: USER or MODEL, fixed at creation
        content: Text content
        attachments: Metadata of files sent with the turn
        created_at: Creation timestamp (UTC)
    """

    role: Role
    content: str
    attachments: tuple[AttachmentMeta, ...] = ()
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_document(self) -> dict[str, Any]:
        """Serialize to the embedded JSON layout stored on the session row."""
        return {
            "role": self.role.value,
            "content": self.content,
            "attachments": [a.to_document() for a in self.attachments],
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "Turn":
        """
        Rebuild a Turn from its stored JSON document.

        Args:
            doc: Mapping with role, content, attachments and createdAt keys

        Returns:
            Turn: Parsed turn

        Raises:
            ValueError: If the stored role is not a known Role
        """
        created_raw = doc.get("createdAt")
        created_at = (
            datetime.fromisoformat(created_raw)
            if isinstance(created_raw, str)
            else datetime.now(timezone.utc)
        )
        return cls(
            role=Role(doc["role"]),
            content=str(doc.get("content", "")),
            attachments=tuple(
                AttachmentMeta.from_document(a) for a in doc.get("attachments") or []
            ),
            created_at=created_at,
        )
