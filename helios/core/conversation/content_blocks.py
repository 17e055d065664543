"""
Provider content blocks.

Transient, role-tagged part lists handed to the generative provider. The two
roles are separate types so that merging is only expressible between user
blocks; a ModelBlock has no merge operation at all.

Dependencies: dataclasses
System role: Provider request shape, derived fresh on every call
"""

from dataclasses import dataclass
from typing import ClassVar, Union


@dataclass(frozen=True)
class TextPart:
    """Plain text part."""

    text: str


@dataclass(frozen=True)
class InlineDataPart:
    """Binary payload sent inline with its MIME type."""

    data: bytes
    mime_type: str

    def __repr__(self) -> str:
        return f"InlineDataPart(mime_type={self.mime_type!r}, size={len(self.data)})"


Part = Union[TextPart, InlineDataPart]


@dataclass(frozen=True)
class UserBlock:
    """Content authored by the user."""

    parts: tuple[Part, ...]
    role: ClassVar[str] = "user"

    def merge(self, other: "UserBlock") -> "UserBlock":
        """Return a block holding this block's parts followed by ``other``'s."""
        return UserBlock(parts=self.parts + other.parts)


@dataclass(frozen=True)
class ModelBlock:
    """Content previously produced by the model."""

    parts: tuple[Part, ...]
    role: ClassVar[str] = "model"


ContentBlock = Union[UserBlock, ModelBlock]
