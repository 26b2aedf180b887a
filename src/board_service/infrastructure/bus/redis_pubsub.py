"""Redis Pub/Sub: cross-process fan-out into each process's local hub."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Coroutine

import redis.asyncio as aioredis
from pydantic import ValidationError as EnvelopeError
from redis.exceptions import RedisError

from board_service.infrastructure.bus.serializer import deserialize_event, serialize_event

logger = logging.getLogger(__name__)


class RedisPubSubPublisher:
    """Implements application.ports.bus.EventPublisher.

    Publish failures are logged and absorbed: live updates are best-effort
    and the committed state is already durable.
    """

    def __init__(self, redis: aioredis.Redis, channel: str) -> None:
        self._redis = redis
        self._channel = channel

    async def publish(self, event_type: str, data: dict[str, Any]) -> None:
        raw = serialize_event(event_type, data)
        try:
            await self._redis.publish(self._channel, raw)
        except RedisError:
            logger.warning("Failed to publish %s to %s", event_type, self._channel, exc_info=True)


OnEventCallback = Callable[[str, dict[str, Any]], Coroutine[Any, Any, None]]


class RedisRelay:
    """Relays every event on a channel into a local callback (normally ``hub.publish``).

    Events published while the connection is down are lost; the relay
    re-subscribes with a capped backoff.
    """

    def __init__(
        self,
        redis: aioredis.Redis,
        channel: str,
        callback: OnEventCallback,
        *,
        max_backoff: float = 30.0,
    ) -> None:
        self._redis = redis
        self._channel = channel
        self._callback = callback
        self._max_backoff = max_backoff
        self._task: asyncio.Task[None] | None = None

    async def start(self) -> None:
        self._task = asyncio.create_task(self._run(), name="redis-relay")
        logger.info("Redis relay started on channel=%s", self._channel)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Redis relay stopped")

    async def _run(self) -> None:
        backoff = 1.0
        while True:
            try:
                await self._listen()
            except RedisError:
                logger.warning("Redis relay lost connection, retrying in %.0fs", backoff, exc_info=True)
                await asyncio.sleep(backoff)
                backoff = min(backoff * 2, self._max_backoff)
            else:
                backoff = 1.0

    async def _listen(self) -> None:
        pubsub = self._redis.pubsub()
        await pubsub.subscribe(self._channel)
        try:
            async for message in pubsub.listen():
                if message["type"] != "message":
                    continue
                await self._dispatch(message["data"])
        finally:
            await pubsub.aclose()

    async def _dispatch(self, raw: str | bytes) -> None:
        try:
            event_type, data = deserialize_event(raw)
        except EnvelopeError:
            logger.warning("Ignoring malformed envelope on %s", self._channel)
            return
        await self._callback(event_type, data)
