from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, TypeVar

from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect
from pydantic import BaseModel
from pydantic import ValidationError as PayloadError

from board_service.api.deps import get_verifier
from board_service.api.middleware.correlation_id import bound_correlation_id
from board_service.application.dto.message import MessageDraft
from board_service.application.dto.principal import Principal
from board_service.application.exceptions import AppError, ServerError, ValidationError
from board_service.application.policies.permissions import assert_admin
from board_service.config import settings
from board_service.infrastructure.ws.hub import BroadcastHub, ViewerSession
from board_service.infrastructure.ws.protocol import (
    CreateMessageIntent,
    DeleteMessageIntent,
    EditMessageIntent,
    WsInbound,
    error_data,
)
from board_service.services import message_service, poll_service
from board_service.services.payloads import message_payload, poll_payload

logger = logging.getLogger(__name__)
router = APIRouter(tags=["websocket"])


async def _authenticate(token: str) -> Principal | None:
    try:
        verifier = get_verifier()
        return await verifier.verify(token)
    except Exception:
        logger.debug("WS auth failed", exc_info=True)
        return None


@router.websocket("/ws/board")
async def ws_board(
    websocket: WebSocket,
    token: str | None = Query(None),
) -> None:
    """Live feed. Anonymous viewers may watch; mutations need an admin token."""
    principal: Principal | None = None
    if token:
        principal = await _authenticate(token)
        if principal is None:
            await websocket.close(code=4001, reason="Authentication failed")
            return

    hub: BroadcastHub = websocket.app.state.hub
    await websocket.accept()
    session = hub.open_session(websocket, principal)
    hub.subscribe(session)

    heartbeat_task = asyncio.create_task(
        _heartbeat(session), name=f"ws-heartbeat-{session.id}",
    )
    with bound_correlation_id(session.id):
        logger.info("WS viewer connected (admin=%s)", bool(principal and principal.is_admin))
        try:
            await _read_loop(websocket, session)
        except WebSocketDisconnect:
            pass
        except Exception:
            logger.exception("WS error for session %s", session.id)
        finally:
            heartbeat_task.cancel()
            hub.unsubscribe(session)
            logger.info("WS viewer disconnected (dropped=%d)", session.dropped)


async def _heartbeat(session: ViewerSession) -> None:
    interval = settings.WS_HEARTBEAT_SECONDS
    try:
        while True:
            await asyncio.sleep(interval)
            await session.send("pong", {})
    except asyncio.CancelledError:
        pass


async def _read_loop(ws: WebSocket, session: ViewerSession) -> None:
    while True:
        raw = await ws.receive_text()
        try:
            msg = WsInbound.model_validate_json(raw)
        except PayloadError:
            await session.send("error", error_data("invalid_payload"))
            continue

        handler = _HANDLERS.get(msg.type)
        if handler is None:
            await session.send("error", error_data("unknown_type", frame_type=msg.type))
            continue

        try:
            await handler(ws, session, msg.data)
        except AppError as exc:
            await session.send("error", error_data(exc.code, exc.detail, msg.type))
        except Exception:
            # One bad frame must not end the viewer's session.
            logger.exception("WS handler %s failed for session %s", msg.type, session.id)
            await session.send("error", error_data(ServerError.code, "Internal error", msg.type))


_Intent = TypeVar("_Intent", bound=BaseModel)


def _parse(model: type[_Intent], data: dict[str, Any]) -> _Intent:
    try:
        return model.model_validate(data)
    except PayloadError as exc:
        fields = ", ".join(sorted({str(e["loc"][0]) for e in exc.errors() if e["loc"]}))
        raise ValidationError(f"Invalid fields: {fields}" if fields else "Invalid payload") from exc


async def _handle_ping(ws: WebSocket, session: ViewerSession, data: dict[str, Any]) -> None:
    await session.send("pong", {})


async def _handle_history(ws: WebSocket, session: ViewerSession, data: dict[str, Any]) -> None:
    async with ws.app.state.uow_factory() as uow:
        async with uow:
            messages = await message_service.list_messages(uow)
            polls = await poll_service.list_polls(uow)
    await session.send(
        "history",
        {
            "messages": [message_payload(m) for m in messages],
            "polls": [poll_payload(p) for p in polls],
        },
    )


async def _handle_create(ws: WebSocket, session: ViewerSession, data: dict[str, Any]) -> None:
    assert_admin(session.principal)
    intent = _parse(CreateMessageIntent, data)
    draft = MessageDraft(
        kind=intent.kind,
        body=intent.body,
        attachment_ref=intent.attachment_ref,
        attachment_name=intent.attachment_name,
    )
    async with ws.app.state.uow_factory() as uow:
        await message_service.create_message(
            session.principal, draft, uow, ws.app.state.publisher,
        )


async def _handle_edit(ws: WebSocket, session: ViewerSession, data: dict[str, Any]) -> None:
    assert_admin(session.principal)
    intent = _parse(EditMessageIntent, data)
    async with ws.app.state.uow_factory() as uow:
        await message_service.edit_message(
            session.principal, intent.id, intent.body, uow, ws.app.state.publisher,
        )


async def _handle_delete(ws: WebSocket, session: ViewerSession, data: dict[str, Any]) -> None:
    assert_admin(session.principal)
    intent = _parse(DeleteMessageIntent, data)
    async with ws.app.state.uow_factory() as uow:
        await message_service.delete_message(
            session.principal,
            intent.id,
            uow,
            ws.app.state.publisher,
            ws.app.state.storage,
        )


_Handler = Callable[[WebSocket, ViewerSession, dict[str, Any]], Awaitable[None]]

_HANDLERS: dict[str, _Handler] = {
    "ping": _handle_ping,
    "history": _handle_history,
    "message.create": _handle_create,
    "message.edit": _handle_edit,
    "message.delete": _handle_delete,
}
