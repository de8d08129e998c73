from __future__ import annotations

import asyncio
import contextlib
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from club_realtime.api.deps import get_verifier
from club_realtime.config import settings
from club_realtime.domain.value_objects.enums import EventType
from club_realtime.infrastructure.ws.channel import SocketChannel
from club_realtime.infrastructure.ws.handler import InboundFrameHandler, SocketState
from club_realtime.infrastructure.ws.manager import ConnectionManager
from club_realtime.infrastructure.ws.protocol import encode_event

logger = logging.getLogger(__name__)
router = APIRouter(tags=["websocket"])


@router.websocket(settings.WS_PATH)
async def ws_endpoint(websocket: WebSocket) -> None:
    registry: ConnectionManager = websocket.app.state.registry
    await websocket.accept()

    channel = SocketChannel(websocket, max_queue=settings.WS_SEND_QUEUE_SIZE)
    verifier = get_verifier() if settings.WS_AUTH_MODE == "token" else None
    handler = InboundFrameHandler(channel, registry, verifier=verifier)
    # a broken channel closes the socket; the handler unbinds and stops reading
    channel.on_broken = handler.connection_broken
    channel.start()

    heartbeat_task = None
    if settings.WS_HEARTBEAT_SECONDS > 0:
        heartbeat_task = asyncio.create_task(_heartbeat(channel), name="ws-heartbeat")
    try:
        await _read_loop(websocket, handler)
    except WebSocketDisconnect:
        pass
    except Exception:
        logger.exception("WS error for user %s", handler.user_id)
    finally:
        if heartbeat_task is not None:
            heartbeat_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await heartbeat_task
        handler.close()
        await channel.close()


async def _heartbeat(channel: SocketChannel) -> None:
    interval = settings.WS_HEARTBEAT_SECONDS
    raw = encode_event(EventType.HEARTBEAT, {})
    while True:
        await asyncio.sleep(interval)
        channel.send(raw)


async def _read_loop(ws: WebSocket, handler: InboundFrameHandler) -> None:
    while handler.state is not SocketState.CLOSED:
        message = await ws.receive()
        if message["type"] == "websocket.disconnect":
            return
        raw = message.get("text")
        if raw is None:
            data = message.get("bytes")
            if data is None:
                continue
            raw = data.decode("utf-8", errors="replace")
        await handler.handle(raw)
