from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence
from datetime import datetime, timezone

from board_service.application.dto.principal import Principal
from board_service.application.exceptions import NotFoundError, ValidationError
from board_service.application.policies.content import normalize_poll
from board_service.application.policies.permissions import assert_admin
from board_service.application.ports.bus import EventPublisher
from board_service.application.uow import UnitOfWork
from board_service.domain.entities.poll import Poll, PollOption
from board_service.domain.value_objects.enums import BoardEvent
from board_service.services.payloads import poll_payload

logger = logging.getLogger(__name__)


async def list_polls(uow: UnitOfWork) -> list[Poll]:
    return await uow.polls.list_ordered()


async def create_poll(
    principal: Principal | None,
    question: str | None,
    options: Sequence[str] | None,
    uow: UnitOfWork,
    publisher: EventPublisher,
) -> Poll:
    actor = assert_admin(principal)
    question, texts = normalize_poll(question, options)

    poll = Poll(
        id=uuid.uuid4(),
        question=question,
        options=tuple(PollOption(text=t) for t in texts),
        created_at=datetime.now(timezone.utc),
    )
    async with uow:
        poll = await uow.polls_w.insert(poll)
        await uow.commit()

    logger.info("Poll %s created by %s with %d options", poll.id, actor.subject_id, len(texts))
    await publisher.publish(BoardEvent.POLL_CREATED, {"poll": poll_payload(poll)})
    return poll


async def vote(
    poll_id: uuid.UUID,
    option_index: int | None,
    uow: UnitOfWork,
    publisher: EventPublisher,
) -> Poll:
    """Add one vote to an option. Repeat votes from the same caller are counted."""
    async with uow:
        poll = await uow.polls.get(poll_id)
        if poll is None:
            raise NotFoundError("Poll not found")
        if (
            not isinstance(option_index, int)
            or isinstance(option_index, bool)
            or not 0 <= option_index < len(poll.options)
        ):
            raise ValidationError("Invalid option index")

        if not await uow.polls_w.increment_vote(poll_id, option_index):
            raise NotFoundError("Poll not found")
        await uow.commit()

        poll = await uow.polls.get(poll_id)
        if poll is None:
            raise NotFoundError("Poll not found")

    await publisher.publish(BoardEvent.POLL_VOTED, {"poll": poll_payload(poll)})
    return poll
