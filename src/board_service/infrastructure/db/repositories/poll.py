from __future__ import annotations

from collections import defaultdict
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from board_service.domain.entities.poll import Poll
from board_service.infrastructure.db.mappers import poll as mapper
from board_service.infrastructure.db.models.poll import PollModel, PollOptionModel


class PollReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, poll_id: UUID) -> Poll | None:
        model = await self._session.scalar(
            select(PollModel).where(PollModel.id == poll_id)
        )
        if model is None:
            return None
        options = await self._load_options([poll_id])
        return mapper.model_to_entity(model, options[poll_id])

    async def list_ordered(self) -> list[Poll]:
        result = await self._session.execute(
            select(PollModel).order_by(PollModel.created_at.asc(), PollModel.seq.asc())
        )
        models = result.scalars().all()
        options = await self._load_options([m.id for m in models])
        return [mapper.model_to_entity(m, options[m.id]) for m in models]

    async def _load_options(self, poll_ids: list[UUID]) -> dict[UUID, list[PollOptionModel]]:
        grouped: dict[UUID, list[PollOptionModel]] = defaultdict(list)
        if not poll_ids:
            return grouped
        # Vote counts change through bulk UPDATEs, so never trust the identity map here.
        stmt = (
            select(PollOptionModel)
            .where(PollOptionModel.poll_id.in_(poll_ids))
            .order_by(PollOptionModel.poll_id, PollOptionModel.position)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        for option in result.scalars().all():
            grouped[option.poll_id].append(option)
        return grouped


class PollWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def insert(self, poll: Poll) -> Poll:
        model = mapper.entity_to_model(poll)
        self._session.add(model)
        await self._session.flush()
        return mapper.model_to_entity(model, model.options)

    async def increment_vote(self, poll_id: UUID, option_index: int) -> bool:
        stmt = (
            update(PollOptionModel)
            .where(
                PollOptionModel.poll_id == poll_id,
                PollOptionModel.position == option_index,
            )
            .values(votes=PollOptionModel.votes + 1)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount == 1
