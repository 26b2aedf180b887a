from __future__ import annotations

from typing import Protocol
from uuid import UUID

from board_service.domain.entities.message import Message


class MessageReader(Protocol):
    async def get(self, message_id: UUID, *, for_update: bool = False) -> Message | None:
        """Point lookup. ``for_update`` locks the row until the transaction ends."""
        ...

    async def list_ordered(self) -> list[Message]:
        """Every message, ascending by (created_at, insertion sequence)."""
        ...


class MessageWriter(Protocol):
    async def insert(self, message: Message) -> Message: ...

    async def update(self, message_id: UUID, **changes: object) -> Message | None:
        """Apply ``body``/``edited`` changes. Returns None when the row is gone."""
        ...

    async def delete(self, message_id: UUID) -> bool: ...
