from __future__ import annotations

from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from board_service.application.exceptions import ValidationError
from board_service.domain.entities.message import Message
from board_service.infrastructure.db.mappers import message as mapper
from board_service.infrastructure.db.models.message import MessageModel

MUTABLE_FIELDS = frozenset({"body", "edited"})


class MessageReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, message_id: UUID, *, for_update: bool = False) -> Message | None:
        stmt = (
            select(MessageModel)
            .where(MessageModel.id == message_id)
            .execution_options(populate_existing=True)
        )
        if for_update:
            stmt = stmt.with_for_update()
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return mapper.model_to_entity(model) if model else None

    async def list_ordered(self) -> list[Message]:
        stmt = select(MessageModel).order_by(
            MessageModel.created_at.asc(),
            MessageModel.seq.asc(),
        )
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]


class MessageWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._reader = MessageReaderRepo(session)

    async def insert(self, message: Message) -> Message:
        if not message.body and message.attachment_ref is None:
            raise ValidationError("Message must have a body or an attachment")
        model = mapper.entity_to_model(message)
        self._session.add(model)
        await self._session.flush()
        return mapper.model_to_entity(model)

    async def update(self, message_id: UUID, **changes: object) -> Message | None:
        rejected = sorted(set(changes) - MUTABLE_FIELDS)
        if rejected:
            raise ValidationError(f"Fields cannot be changed: {', '.join(rejected)}")
        if changes:
            stmt = (
                update(MessageModel)
                .where(MessageModel.id == message_id)
                .values(**changes)
                .execution_options(synchronize_session=False)
            )
            result = await self._session.execute(stmt)
            if result.rowcount == 0:
                return None
        return await self._reader.get(message_id)

    async def delete(self, message_id: UUID) -> bool:
        stmt = (
            delete(MessageModel)
            .where(MessageModel.id == message_id)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0
