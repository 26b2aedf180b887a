from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, File, Form, UploadFile

from board_service.api.deps import CurrentPrincipal, PublisherDep, StorageDep, UoWDep
from board_service.api.v1.schemas.message import (
    CreateMessageRequest,
    DeleteMessageResponse,
    EditMessageRequest,
    MessageResponse,
)
from board_service.application.dto.message import MessageDraft
from board_service.application.exceptions import ValidationError
from board_service.application.policies.permissions import assert_admin
from board_service.config import settings
from board_service.domain.value_objects.enums import MessageKind
from board_service.services import message_service

router = APIRouter(prefix="/api/v1/board/messages", tags=["messages"])


@router.get("", response_model=list[MessageResponse])
async def list_messages(uow: UoWDep) -> list[MessageResponse]:
    messages = await message_service.list_messages(uow)
    return [MessageResponse.model_validate(m, from_attributes=True) for m in messages]


@router.post("", response_model=MessageResponse, status_code=201)
async def create_message(
    body: CreateMessageRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
    publisher: PublisherDep,
) -> MessageResponse:
    draft = MessageDraft(
        kind=body.kind,
        body=body.body,
        attachment_ref=body.attachment_ref,
        attachment_name=body.attachment_name,
    )
    msg = await message_service.create_message(principal, draft, uow, publisher)
    return MessageResponse.model_validate(msg, from_attributes=True)


@router.post("/upload", response_model=MessageResponse, status_code=201)
async def upload_message(
    principal: CurrentPrincipal,
    uow: UoWDep,
    publisher: PublisherDep,
    storage: StorageDep,
    file: UploadFile = File(...),
    kind: MessageKind = Form(MessageKind.FILE),
    body: str = Form(""),
) -> MessageResponse:
    # Gate before touching storage so non-admins cannot write files.
    assert_admin(principal)
    if not kind.is_attachment:
        raise ValidationError(f"{kind} message cannot carry an attachment")

    data = await file.read(settings.MAX_UPLOAD_BYTES + 1)
    if len(data) > settings.MAX_UPLOAD_BYTES:
        raise ValidationError("Attachment is too large")
    if not data:
        raise ValidationError("Attachment is empty")

    filename = file.filename or "upload"
    ref = await storage.save(data, filename)
    draft = MessageDraft(kind=kind, body=body, attachment_ref=ref, attachment_name=filename)
    try:
        msg = await message_service.create_message(principal, draft, uow, publisher)
    except Exception:
        await storage.delete(ref)
        raise
    return MessageResponse.model_validate(msg, from_attributes=True)


@router.put("/{message_id}", response_model=MessageResponse)
async def edit_message(
    message_id: UUID,
    body: EditMessageRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
    publisher: PublisherDep,
) -> MessageResponse:
    msg = await message_service.edit_message(principal, message_id, body.body, uow, publisher)
    return MessageResponse.model_validate(msg, from_attributes=True)


@router.delete("/{message_id}", response_model=DeleteMessageResponse)
async def delete_message(
    message_id: UUID,
    principal: CurrentPrincipal,
    uow: UoWDep,
    publisher: PublisherDep,
    storage: StorageDep,
) -> DeleteMessageResponse:
    await message_service.delete_message(principal, message_id, uow, publisher, storage)
    return DeleteMessageResponse(id=message_id)
