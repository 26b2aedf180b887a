"""Content rules shared by the message and poll services."""
from __future__ import annotations

from collections.abc import Sequence

from board_service.application.dto.message import MessageDraft
from board_service.application.exceptions import ValidationError
from board_service.domain.value_objects.enums import MessageKind

MIN_POLL_OPTIONS = 2


def normalize_draft(draft: MessageDraft) -> MessageDraft:
    """Return a cleaned copy of *draft* or raise ValidationError."""
    body = (draft.body or "").strip()
    ref = draft.attachment_ref or None

    if draft.kind.is_attachment:
        if ref is None:
            raise ValidationError(f"{draft.kind} message requires an attachment")
    else:
        if ref is not None:
            raise ValidationError(f"{draft.kind} message cannot carry an attachment")
        if not body:
            raise ValidationError("Message body is required")

    return MessageDraft(
        kind=draft.kind,
        body=body,
        attachment_ref=ref,
        attachment_name=draft.attachment_name if ref else None,
    )


def normalize_body(body: str | None) -> str:
    cleaned = (body or "").strip()
    if not cleaned:
        raise ValidationError("New content is required")
    return cleaned


def normalize_poll(question: str | None, options: Sequence[str] | None) -> tuple[str, list[str]]:
    cleaned_question = (question or "").strip()
    cleaned_options = [(o or "").strip() for o in options or []]
    if not cleaned_question:
        raise ValidationError("Poll must have a question")
    if len(cleaned_options) < MIN_POLL_OPTIONS:
        raise ValidationError("Poll must have at least two options")
    if not all(cleaned_options):
        raise ValidationError("Poll options cannot be empty")
    return cleaned_question, cleaned_options
