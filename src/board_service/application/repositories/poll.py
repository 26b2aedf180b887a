from __future__ import annotations

from typing import Protocol
from uuid import UUID

from board_service.domain.entities.poll import Poll


class PollReader(Protocol):
    async def get(self, poll_id: UUID) -> Poll | None: ...

    async def list_ordered(self) -> list[Poll]: ...


class PollWriter(Protocol):
    async def insert(self, poll: Poll) -> Poll: ...

    async def increment_vote(self, poll_id: UUID, option_index: int) -> bool:
        """Atomically add one vote. False when no such option row exists."""
        ...
