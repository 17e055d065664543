"""
Chat message endpoint.

Routes: POST /sessions/{session_id}/messages

Accepts a multipart submission (``prompt`` plus any number of ``attachments``)
and streams the model's answer back as chunked ``text/plain``. Every failure
that happens before the first fragment is returned as a JSON error; once the
body has started, a provider failure aborts the response.

Dependencies: fastapi, starlette, helios.application.services.chat_service
System role: Streaming chat HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from helios.api.deps import get_chat_service, get_settings_dependency
from helios.api.routers.router_utils import handle_session_errors
from helios.api.security import get_current_owner
from helios.application.services.chat_service import ChatService
from helios.configs import Settings
from helios.core.conversation import SubmittedAttachment
from helios.core.exceptions import AttachmentTooLargeError
from helios.models.common import ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/sessions",
    tags=["chat"],
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)

STREAM_HEADERS = {
    "Cache-Control": "no-cache",
    "X-Accel-Buffering": "no",
}


async def read_attachments(
    uploads: list[UploadFile],
    max_bytes: int,
) -> list[SubmittedAttachment]:
    """
    Read uploaded files into memory, enforcing the per-file size limit.

    Raises:
        AttachmentTooLargeError: If any file exceeds ``max_bytes``
    """
    attachments = []
    for upload in uploads:
        file_name = upload.filename or "attachment"
        if upload.size is not None and upload.size > max_bytes:
            raise AttachmentTooLargeError(file_name, upload.size, max_bytes)

        data = await upload.read(max_bytes + 1)
        if len(data) > max_bytes:
            raise AttachmentTooLargeError(file_name, len(data), max_bytes)

        attachments.append(
            SubmittedAttachment(
                file_name=file_name,
                mime_type=upload.content_type or "application/octet-stream",
                data=data,
            )
        )
    return attachments


@router.post("/{session_id}/messages")
@handle_session_errors
async def send_message(
    session_id: UUID,
    prompt: str = Form(default=""),
    attachments: list[UploadFile] | None = File(default=None),
    owner: str = Depends(get_current_owner),
    settings: Settings = Depends(get_settings_dependency),
    chat_service: ChatService = Depends(get_chat_service),
) -> StreamingResponse:
    """
    Send a message to a session and stream the answer.

    Args:
        session_id: Target session UUID
        prompt: Message text (may be empty when files are attached)
        attachments: Uploaded files inlined into this request only
        owner: Authenticated owner id
        settings: Application settings
        chat_service: Injected ChatService

    Returns:
        StreamingResponse: text/plain fragments in emission order

    Raises:
        HTTPException(400): Empty submission
        HTTPException(404): Session not found for this owner
        HTTPException(413): Attachment over the size limit
        HTTPException(502): Provider failed before producing output
    """
    submitted = await read_attachments(
        attachments or [],
        settings.uploads.max_file_size_bytes,
    )
    exchange = await chat_service.open_exchange(
        session_id,
        owner,
        prompt,
        submitted,
    )
    channel = chat_service.start_exchange(exchange)

    return StreamingResponse(
        channel.stream(),
        media_type="text/plain; charset=utf-8",
        headers=STREAM_HEADERS,
        background=BackgroundTask(channel.detach),
    )
