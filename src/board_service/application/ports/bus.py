from __future__ import annotations

from typing import Any, Protocol


class EventPublisher(Protocol):
    """Best-effort fan-out of committed changes. Implementations must not raise on delivery failure."""

    async def publish(self, event_type: str, data: dict[str, Any]) -> None: ...
