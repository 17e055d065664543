"""
Conversation domain: stored turns, provider content blocks, and turn assembly.
"""

from helios.core.conversation.content_blocks import (
    ContentBlock,
    InlineDataPart,
    ModelBlock,
    Part,
    TextPart,
    UserBlock,
)
from helios.core.conversation.turn_assembler import assemble_contents, validate_submission
from helios.core.conversation.turns import (
    AttachmentMeta,
    Role,
    SubmittedAttachment,
    Turn,
)

__all__ = [
    "AttachmentMeta",
    "ContentBlock",
    "InlineDataPart",
    "ModelBlock",
    "Part",
    "Role",
    "SubmittedAttachment",
    "TextPart",
    "Turn",
    "UserBlock",
    "assemble_contents",
    "validate_submission",
]
