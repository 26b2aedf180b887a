from __future__ import annotations

from typing import Protocol


class AttachmentStorage(Protocol):
    async def save(self, data: bytes, filename: str) -> str:
        """Persist *data* and return an opaque reference usable as attachment_ref."""
        ...

    async def delete(self, ref: str) -> None: ...
