from __future__ import annotations

from types import TracebackType
from typing import Protocol, Self

from board_service.application.repositories.message import MessageReader, MessageWriter
from board_service.application.repositories.poll import PollReader, PollWriter


class UnitOfWork(Protocol):
    messages: MessageReader
    messages_w: MessageWriter
    polls: PollReader
    polls_w: PollWriter

    async def commit(self) -> None: ...
    async def rollback(self) -> None: ...
    async def flush(self) -> None: ...

    async def __aenter__(self) -> Self: ...

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None: ...
