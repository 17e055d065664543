"""
Turn assembler.

Builds the ordered content-block list for one provider call from a session's
stored turns plus the newly submitted prompt and attachments.

Dependencies: helios.core.conversation, helios.core.exceptions
System role: Pure transformation from persisted history to provider request
"""

from collections.abc import Iterable, Sequence

from helios.core.conversation.content_blocks import (
    ContentBlock,
    InlineDataPart,
    ModelBlock,
    Part,
    TextPart,
    UserBlock,
)
from helios.core.conversation.turns import Role, SubmittedAttachment, Turn
from helios.core.exceptions import ValidationError


def validate_submission(prompt: str, attachments: Sequence[SubmittedAttachment]) -> None:
    """
    Reject a submission that carries neither text nor files.

    Args:
        prompt: Submitted prompt text
        attachments: Submitted files

    Raises:
        ValidationError: If the prompt is empty and there are no attachments
    """
    if not prompt and not attachments:
        raise ValidationError("A prompt or at least one attachment is required", field="prompt")


def project_turn(turn: Turn) -> ContentBlock:
    """
    Project a stored turn into a single-text-part block.

    Historical attachments are not re-inlined; only their turn text is sent.
    """
    parts = (TextPart(text=turn.content),)
    if turn.role is Role.MODEL:
        return ModelBlock(parts=parts)
    return UserBlock(parts=parts)


def build_submission_block(
    prompt: str,
    attachments: Sequence[SubmittedAttachment],
) -> UserBlock:
    """
    Build the user block for the current submission.

    The prompt comes first (skipped when empty), then one inline part per
    attachment in submission order.
    """
    parts: list[Part] = []
    if prompt:
        parts.append(TextPart(text=prompt))
    parts.extend(InlineDataPart(data=a.data, mime_type=a.mime_type) for a in attachments)
    return UserBlock(parts=tuple(parts))


def normalize_adjacent(blocks: Iterable[ContentBlock]) -> list[ContentBlock]:
    """
    Merge consecutive user blocks left to right.

    Model blocks are kept as separate entries and never absorb neighbours.

    Args:
        blocks: Chronologically ordered blocks

    Returns:
        list[ContentBlock]: Blocks with no two adjacent user blocks
    """
    merged: list[ContentBlock] = []
    for block in blocks:
        previous = merged[-1] if merged else None
        if isinstance(previous, UserBlock) and isinstance(block, UserBlock):
            merged[-1] = previous.merge(block)
        else:
            merged.append(block)
    return merged


def assemble_contents(
    turns: Sequence[Turn],
    prompt: str,
    attachments: Sequence[SubmittedAttachment] = (),
) -> list[ContentBlock]:
    """
    Assemble the provider request for one exchange.

    Args:
        turns: Stored turns, oldest first
        prompt: New prompt text (may be empty when attachments are present)
        attachments: New attachments with their binary payloads

    Returns:
        list[ContentBlock]: Chronological blocks ending in exactly one user
        block for the current submission, with no adjacent user blocks

    Raises:
        ValidationError: If neither a prompt nor an attachment was submitted
    """
    validate_submission(prompt, attachments)
    history = [project_turn(turn) for turn in turns]
    history.append(build_submission_block(prompt, attachments))
    return normalize_adjacent(history)
