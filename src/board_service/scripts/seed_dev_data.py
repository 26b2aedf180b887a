"""Seed development data: a few announcements and a lunch poll."""
from __future__ import annotations

import asyncio
import logging
import uuid
from datetime import datetime, timedelta, timezone

from board_service.application.dto.principal import DEFAULT_ADMIN_NAME
from board_service.domain.entities.message import Message
from board_service.domain.entities.poll import Poll, PollOption
from board_service.domain.value_objects.enums import MessageKind
from board_service.infrastructure.db.session import AsyncSessionLocal
from board_service.infrastructure.db.uow import SqlAlchemyUoW

logger = logging.getLogger(__name__)

DEV_ADMIN_ID = "default_admin_id"


async def seed() -> None:
    async with AsyncSessionLocal() as session:
        uow = SqlAlchemyUoW(session)
        now = datetime.now(timezone.utc)

        bodies = [
            "Welcome to the board!",
            "Office closes early on Friday.",
            "Slides from today's meeting are attached below.",
        ]
        async with uow:
            for offset, body in enumerate(bodies):
                await uow.messages_w.insert(
                    Message(
                        id=uuid.uuid4(),
                        author_id=DEV_ADMIN_ID,
                        author_display_name=DEFAULT_ADMIN_NAME,
                        kind=MessageKind.TEXT,
                        body=body,
                        attachment_ref=None,
                        attachment_name=None,
                        edited=False,
                        created_at=now + timedelta(seconds=offset),
                    )
                )
            await uow.polls_w.insert(
                Poll(
                    id=uuid.uuid4(),
                    question="Lunch?",
                    options=(PollOption("Pizza"), PollOption("Salad")),
                    created_at=now,
                )
            )
            await uow.commit()
        logger.info("Seeded %d messages and 1 poll", len(bodies))


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    asyncio.run(seed())


if __name__ == "__main__":
    main()
