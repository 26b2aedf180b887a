from __future__ import annotations

from dataclasses import dataclass

from board_service.domain.value_objects.enums import MessageKind


@dataclass(frozen=True, slots=True)
class MessageDraft:
    """Admin-supplied content for a new message."""

    kind: MessageKind = MessageKind.TEXT
    body: str = ""
    attachment_ref: str | None = None
    attachment_name: str | None = None
