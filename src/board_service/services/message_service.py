from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

from board_service.application.dto.message import MessageDraft
from board_service.application.dto.principal import Principal
from board_service.application.exceptions import NotFoundError
from board_service.application.policies.content import normalize_body, normalize_draft
from board_service.application.policies.permissions import assert_admin, assert_author
from board_service.application.ports.bus import EventPublisher
from board_service.application.ports.storage import AttachmentStorage
from board_service.application.uow import UnitOfWork
from board_service.domain.entities.message import Message
from board_service.domain.value_objects.enums import BoardEvent
from board_service.services.payloads import message_payload

logger = logging.getLogger(__name__)


async def list_messages(uow: UnitOfWork) -> list[Message]:
    return await uow.messages.list_ordered()


async def create_message(
    principal: Principal | None,
    draft: MessageDraft,
    uow: UnitOfWork,
    publisher: EventPublisher,
) -> Message:
    """Persist a new message and announce it once the commit has succeeded."""
    actor = assert_admin(principal)
    draft = normalize_draft(draft)

    msg = Message(
        id=uuid.uuid4(),
        author_id=actor.subject_id,
        author_display_name=actor.author_name,
        kind=draft.kind.value,
        body=draft.body,
        attachment_ref=draft.attachment_ref,
        attachment_name=draft.attachment_name,
        edited=False,
        created_at=datetime.now(timezone.utc),
    )
    async with uow:
        msg = await uow.messages_w.insert(msg)
        await uow.commit()

    logger.info("Message %s created by %s", msg.id, actor.subject_id)
    await publisher.publish(BoardEvent.MESSAGE_CREATED, {"message": message_payload(msg)})
    return msg


async def edit_message(
    principal: Principal | None,
    message_id: uuid.UUID,
    new_body: str | None,
    uow: UnitOfWork,
    publisher: EventPublisher,
) -> Message:
    actor = assert_admin(principal)
    body = normalize_body(new_body)

    async with uow:
        current = await uow.messages.get(message_id, for_update=True)
        if current is None:
            raise NotFoundError("Message not found")
        assert_author(actor, current)

        updated = await uow.messages_w.update(message_id, body=body, edited=True)
        if updated is None:
            raise NotFoundError("Message not found")
        await uow.commit()

    logger.info("Message %s edited by %s", message_id, actor.subject_id)
    await publisher.publish(BoardEvent.MESSAGE_EDITED, {"message": message_payload(updated)})
    return updated


async def delete_message(
    principal: Principal | None,
    message_id: uuid.UUID,
    uow: UnitOfWork,
    publisher: EventPublisher,
    storage: AttachmentStorage | None = None,
) -> None:
    actor = assert_admin(principal)

    async with uow:
        current = await uow.messages.get(message_id, for_update=True)
        if current is None:
            raise NotFoundError("Message not found")
        assert_author(actor, current)

        if not await uow.messages_w.delete(message_id):
            raise NotFoundError("Message not found")
        await uow.commit()

    logger.info("Message %s deleted by %s", message_id, actor.subject_id)
    await publisher.publish(BoardEvent.MESSAGE_DELETED, {"id": str(message_id)})

    if current.attachment_ref and storage is not None:
        await _release_attachment(storage, current.attachment_ref)


async def _release_attachment(storage: AttachmentStorage, ref: str) -> None:
    # The row is already gone; a leftover file is not worth failing the request over.
    try:
        await storage.delete(ref)
    except Exception:
        logger.exception("Failed to release attachment %s", ref)
