from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import redis.asyncio as aioredis
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from board_service.api.deps import open_uow
from board_service.api.middleware.correlation_id import CorrelationIdMiddleware
from board_service.api.middleware.metrics import RequestTimingMiddleware
from board_service.api.v1.routers import health, messages, polls, ws
from board_service.application.exceptions import AppError
from board_service.config import settings
from board_service.infrastructure.bus.redis_pubsub import (
    RedisPubSubPublisher,
    RedisRelay,
)
from board_service.infrastructure.storage.local import LocalAttachmentStorage
from board_service.infrastructure.ws.hub import BroadcastHub

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup / shutdown lifecycle."""
    hub: BroadcastHub = app.state.hub
    relay: RedisRelay | None = None

    if settings.BROADCAST_BACKEND == "redis":
        app.state.redis = aioredis.from_url(settings.REDIS_URL, decode_responses=True)
        logger.info("Redis connection pool created")
        app.state.publisher = RedisPubSubPublisher(app.state.redis, settings.REDIS_PUBSUB_CHANNEL)
        # Every process relays the shared channel into its own hub.
        relay = RedisRelay(
            app.state.redis,
            settings.REDIS_PUBSUB_CHANNEL,
            hub.publish,
        )
        await relay.start()

    yield

    if relay is not None:
        await relay.stop()
    await hub.drain()
    if app.state.redis is not None:
        await app.state.redis.aclose()
        logger.info("Redis connection pool closed")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Announcement Board Service",
        version="0.1.0",
        lifespan=lifespan,
    )

    hub = BroadcastHub(buffer_size=settings.WS_SEND_BUFFER)
    app.state.hub = hub
    app.state.publisher = hub
    app.state.redis = None
    app.state.storage = LocalAttachmentStorage(settings.UPLOAD_DIR, settings.UPLOAD_URL_PREFIX)
    app.state.uow_factory = open_uow

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestTimingMiddleware)
    app.add_middleware(CorrelationIdMiddleware)

    _register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(messages.router)
    app.include_router(polls.router)
    app.include_router(ws.router)
    app.mount(
        settings.UPLOAD_URL_PREFIX,
        StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False),
        name="uploads",
    )

    return app


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def _app_error(_req: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s: %s", type(exc).__name__, exc.detail)
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})
