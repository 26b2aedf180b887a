from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from board_service.domain.value_objects.enums import MessageKind


class CreateMessageRequest(BaseModel):
    kind: MessageKind = MessageKind.TEXT
    body: str = ""
    attachment_ref: str | None = None
    attachment_name: str | None = None


class EditMessageRequest(BaseModel):
    body: str | None = None


class MessageResponse(BaseModel):
    id: UUID
    author_id: str
    author_display_name: str
    kind: str
    body: str
    attachment_ref: str | None
    attachment_name: str | None
    edited: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class DeleteMessageResponse(BaseModel):
    status: str = "deleted"
    id: UUID
