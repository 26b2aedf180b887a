"""Frames exchanged on the live feed. Both directions use ``{"type", "data"}``."""
from __future__ import annotations

from typing import Any
from uuid import UUID

from pydantic import BaseModel

from board_service.domain.value_objects.enums import MessageKind


class WsInbound(BaseModel):
    """Client intent: ping | history | message.create | message.edit | message.delete."""

    type: str
    data: dict[str, Any] = {}


class WsOutbound(BaseModel):
    type: str
    data: dict[str, Any] = {}


class WsError(BaseModel):
    code: str
    detail: str | None = None
    # Inbound frame type that failed, when known.
    type: str | None = None


def encode(event_type: str, data: dict[str, Any]) -> str:
    return WsOutbound(type=event_type, data=data).model_dump_json()


def error_data(code: str, detail: str | None = None, frame_type: str | None = None) -> dict[str, Any]:
    return WsError(code=code, detail=detail, type=frame_type).model_dump(exclude_none=True)


class CreateMessageIntent(BaseModel):
    kind: MessageKind = MessageKind.TEXT
    body: str = ""
    attachment_ref: str | None = None
    attachment_name: str | None = None


class EditMessageIntent(BaseModel):
    id: UUID
    body: str | None = None


class DeleteMessageIntent(BaseModel):
    id: UUID
