from __future__ import annotations

import logging
from types import TracebackType
from typing import Self

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from board_service.application.exceptions import ServerError
from board_service.infrastructure.db.repositories.message import (
    MessageReaderRepo,
    MessageWriterRepo,
)
from board_service.infrastructure.db.repositories.poll import PollReaderRepo, PollWriterRepo

logger = logging.getLogger(__name__)


class SqlAlchemyUoW:
    """Concrete Unit-of-Work backed by a single AsyncSession.

    Used as an async context manager around a read-modify-write sequence:
    any error rolls the transaction back, and driver errors leave the block
    as ``ServerError`` so storage details never reach callers.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self.messages = MessageReaderRepo(session)
        self.messages_w = MessageWriterRepo(session)
        self.polls = PollReaderRepo(session)
        self.polls_w = PollWriterRepo(session)

    async def flush(self) -> None:
        await self._session.flush()

    async def commit(self) -> None:
        await self._session.commit()

    async def rollback(self) -> None:
        await self._session.rollback()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if exc_type is None:
            return
        try:
            await self.rollback()
        except SQLAlchemyError:
            logger.exception("Rollback failed")
        if isinstance(exc_val, SQLAlchemyError):
            logger.error("Storage error, transaction rolled back: %s", exc_val)
            raise ServerError("Storage unavailable") from exc_val
