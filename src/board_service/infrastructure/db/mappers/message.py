from __future__ import annotations

from board_service.domain.entities.message import Message
from board_service.infrastructure.db.mappers._time import as_utc
from board_service.infrastructure.db.models.message import MessageModel


def model_to_entity(model: MessageModel) -> Message:
    return Message(
        id=model.id,
        author_id=model.author_id,
        author_display_name=model.author_display_name,
        kind=model.kind,
        body=model.body,
        attachment_ref=model.attachment_ref,
        attachment_name=model.attachment_name,
        edited=model.edited,
        created_at=as_utc(model.created_at),
        seq=model.seq,
    )


def entity_to_model(entity: Message) -> MessageModel:
    return MessageModel(
        id=entity.id,
        author_id=entity.author_id,
        author_display_name=entity.author_display_name,
        kind=entity.kind,
        body=entity.body,
        attachment_ref=entity.attachment_ref,
        attachment_name=entity.attachment_name,
        edited=entity.edited,
        created_at=entity.created_at,
    )
