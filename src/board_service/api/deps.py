"""FastAPI dependency injection helpers."""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Annotated, AsyncIterator

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from board_service.application.dto.principal import Principal
from board_service.application.ports.auth import TokenVerifier
from board_service.application.ports.bus import EventPublisher
from board_service.application.ports.storage import AttachmentStorage
from board_service.config import settings
from board_service.infrastructure.auth.hs256_verifier import HS256Verifier
from board_service.infrastructure.auth.jwks_verifier import JWKSVerifier
from board_service.infrastructure.db.session import AsyncSessionLocal
from board_service.infrastructure.db.uow import SqlAlchemyUoW
from board_service.infrastructure.ws.hub import BroadcastHub

_bearer_scheme = HTTPBearer()


@asynccontextmanager
async def open_uow() -> AsyncIterator[SqlAlchemyUoW]:
    """Standalone unit of work for code paths outside request DI (WebSocket intents)."""
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUoW(session)


async def get_uow() -> AsyncIterator[SqlAlchemyUoW]:
    async with open_uow() as uow:
        yield uow


UoWDep = Annotated[SqlAlchemyUoW, Depends(get_uow)]


def _get_verifier() -> TokenVerifier:
    if settings.JWT_VERIFY_MODE == "jwks":
        assert settings.JWKS_URL, "JWKS_URL must be set when JWT_VERIFY_MODE=jwks"
        return JWKSVerifier(settings.JWKS_URL, leeway=settings.JWT_LEEWAY_SECONDS)
    return HS256Verifier(
        settings.JWT_SECRET,
        settings.JWT_ALGORITHM,
        leeway=settings.JWT_LEEWAY_SECONDS,
    )


_verifier: TokenVerifier | None = None


def get_verifier() -> TokenVerifier:
    global _verifier  # noqa: PLW0603
    if _verifier is None:
        _verifier = _get_verifier()
    return _verifier


async def get_current_principal(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(_bearer_scheme)],
) -> Principal:
    verifier = get_verifier()
    try:
        return await verifier.verify(credentials.credentials)
    except Exception as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
        ) from exc


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]


def get_hub(request: Request) -> BroadcastHub:
    return request.app.state.hub


def get_publisher(request: Request) -> EventPublisher:
    return request.app.state.publisher


def get_storage(request: Request) -> AttachmentStorage:
    return request.app.state.storage


HubDep = Annotated[BroadcastHub, Depends(get_hub)]
PublisherDep = Annotated[EventPublisher, Depends(get_publisher)]
StorageDep = Annotated[AttachmentStorage, Depends(get_storage)]
