"""JSON-ready representations of board entities for live events."""
from __future__ import annotations

from typing import Any

from board_service.domain.entities.message import Message
from board_service.domain.entities.poll import Poll


def message_payload(msg: Message) -> dict[str, Any]:
    return {
        "id": str(msg.id),
        "author_id": msg.author_id,
        "author_display_name": msg.author_display_name,
        "kind": msg.kind,
        "body": msg.body,
        "attachment_ref": msg.attachment_ref,
        "attachment_name": msg.attachment_name,
        "edited": msg.edited,
        "created_at": msg.created_at.isoformat(),
    }


def poll_payload(poll: Poll) -> dict[str, Any]:
    return {
        "id": str(poll.id),
        "question": poll.question,
        "options": [{"text": o.text, "votes": o.votes} for o in poll.options],
        "created_at": poll.created_at.isoformat(),
    }
