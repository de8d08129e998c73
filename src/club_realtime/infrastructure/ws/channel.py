"""Ordered, non-blocking outbound writes for a single socket."""
from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Callable

from fastapi import WebSocket, status
from starlette.websockets import WebSocketState

logger = logging.getLogger(__name__)

OnBrokenCallback = Callable[[WebSocket], None]


class SocketChannel:
    """Queues frames for one socket and writes them from a single task.

    ``send`` never blocks and never raises. Frames reach the socket in the
    order ``send`` was called. A failed write, or a queue that fills up because
    the peer stopped reading, is a disconnect: the channel stops accepting
    frames, closes the socket and reports it through ``on_broken``.
    """

    def __init__(
        self,
        socket: WebSocket,
        *,
        max_queue: int = 256,
        on_broken: OnBrokenCallback | None = None,
    ) -> None:
        self.socket = socket
        self.on_broken = on_broken
        self._queue: asyncio.Queue[str] = asyncio.Queue(maxsize=max_queue)
        self._closed = False
        self._writer: asyncio.Task[None] | None = None
        self._closer: asyncio.Task[None] | None = None

    @property
    def is_open(self) -> bool:
        return (
            not self._closed
            and self.socket.client_state == WebSocketState.CONNECTED
            and self.socket.application_state == WebSocketState.CONNECTED
        )

    def start(self) -> None:
        if self._writer is None:
            self._writer = asyncio.create_task(self._drain(), name="ws-writer")

    def send(self, raw: str) -> None:
        if self._closed:
            return
        try:
            self._queue.put_nowait(raw)
        except asyncio.QueueFull:
            logger.warning("WS send queue full (%d frames), dropping connection", self._queue.maxsize)
            self._mark_broken(status.WS_1008_POLICY_VIOLATION)

    async def flush(self) -> None:
        """Wait until every queued frame has been written or discarded."""
        await self._queue.join()

    async def close(self, code: int | None = None) -> None:
        self._closed = True
        self._discard_pending()
        if self._writer is not None:
            self._writer.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._writer
            self._writer = None
        if self._closer is not None:
            await self._closer
            self._closer = None
        if code is not None:
            await self._close_socket(code)

    async def _drain(self) -> None:
        while True:
            raw = await self._queue.get()
            try:
                await self.socket.send_text(raw)
            except Exception:  # noqa: BLE001
                logger.debug("WS write failed", exc_info=True)
                self._mark_broken(status.WS_1011_INTERNAL_ERROR)
                return
            finally:
                self._queue.task_done()

    def _mark_broken(self, code: int) -> None:
        if self._closed:
            return
        self._closed = True
        self._discard_pending()
        self._closer = asyncio.create_task(self._close_socket(code), name="ws-close")
        if self.on_broken is not None:
            self.on_broken(self.socket)

    async def _close_socket(self, code: int) -> None:
        if self.socket.application_state != WebSocketState.CONNECTED:
            return
        try:
            await self.socket.close(code=code)
        except Exception:  # noqa: BLE001
            logger.debug("WS close failed", exc_info=True)

    def _discard_pending(self) -> None:
        while True:
            try:
                self._queue.get_nowait()
            except asyncio.QueueEmpty:
                return
            self._queue.task_done()
