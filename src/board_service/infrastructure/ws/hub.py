"""In-process broadcast hub for live viewer sessions.

Delivery is best-effort. Each session owns a bounded queue drained by its
own sender task, so ``publish`` never waits on a viewer's socket. When a
queue is full or the transport has failed, the event is dropped for that
session only; viewers recover by fetching history again.
"""
from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import Callable
from typing import Any, Protocol

from board_service.application.dto.principal import Principal
from board_service.infrastructure.ws.protocol import encode

logger = logging.getLogger(__name__)


class Transport(Protocol):
    async def send_text(self, data: str) -> None: ...


class ViewerSession:
    """One live connection. Exists only while the underlying socket is open."""

    def __init__(
        self,
        transport: Transport,
        principal: Principal | None = None,
        *,
        buffer_size: int = 64,
    ) -> None:
        self.id = uuid.uuid4().hex
        self.transport = transport
        self.principal = principal
        self.dropped = 0
        self._queue: asyncio.Queue[str] = asyncio.Queue(maxsize=buffer_size)
        self._task: asyncio.Task[None] | None = None

    @property
    def is_open(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, on_failure: Callable[[ViewerSession], None]) -> None:
        self._task = asyncio.create_task(self._pump(on_failure), name=f"ws-sender-{self.id}")

    def offer(self, raw: str) -> bool:
        """Queue an encoded frame without waiting. False if it was dropped."""
        if not self.is_open:
            self.dropped += 1
            return False
        try:
            self._queue.put_nowait(raw)
        except asyncio.QueueFull:
            self.dropped += 1
            return False
        return True

    async def send(self, event_type: str, data: dict[str, Any]) -> None:
        """Queue a direct reply, keeping its place in line with broadcast events."""
        if self.is_open:
            await self._queue.put(encode(event_type, data))

    def close(self) -> None:
        if self._task is not None and self._task is not asyncio.current_task():
            self._task.cancel()

    async def wait_closed(self) -> None:
        if self._task is None:
            return
        try:
            await self._task
        except asyncio.CancelledError:
            pass

    async def _pump(self, on_failure: Callable[[ViewerSession], None]) -> None:
        while True:
            raw = await self._queue.get()
            try:
                await self.transport.send_text(raw)
            except Exception:
                logger.debug("WS send failed for session %s", self.id, exc_info=True)
                on_failure(self)
                return


class BroadcastHub:
    """Tracks live sessions and fans committed events out to all of them.

    Implements application.ports.bus.EventPublisher. Owned by the application
    lifespan: created at startup, drained at shutdown.
    """

    def __init__(self, buffer_size: int = 64) -> None:
        self._buffer_size = buffer_size
        self._sessions: dict[str, ViewerSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session: object) -> bool:
        return isinstance(session, ViewerSession) and session.id in self._sessions

    def open_session(self, transport: Transport, principal: Principal | None = None) -> ViewerSession:
        return ViewerSession(transport, principal, buffer_size=self._buffer_size)

    def subscribe(self, session: ViewerSession) -> None:
        if session.id in self._sessions:
            return
        self._sessions[session.id] = session
        session.start(self.unsubscribe)
        logger.debug("WS subscribed: %s (total=%d)", session.id, len(self._sessions))

    def unsubscribe(self, session: ViewerSession) -> None:
        if self._sessions.pop(session.id, None) is None:
            return
        session.close()
        logger.debug("WS unsubscribed: %s (total=%d)", session.id, len(self._sessions))

    async def publish(self, event_type: str, data: dict[str, Any]) -> None:
        raw = encode(event_type, data)
        for session in list(self._sessions.values()):
            if not session.offer(raw):
                logger.debug("Dropped %s for session %s", event_type, session.id)

    async def drain(self) -> None:
        sessions = list(self._sessions.values())
        for session in sessions:
            self.unsubscribe(session)
        for session in sessions:
            await session.wait_closed()
        if sessions:
            logger.info("Broadcast hub drained %d sessions", len(sessions))
