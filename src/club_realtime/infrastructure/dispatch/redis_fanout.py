"""Dispatcher that fans events out to every process through Redis Pub/Sub."""
from __future__ import annotations

import asyncio
import contextlib
import logging

from club_realtime.application.dto.events import DispatchEvent
from club_realtime.application.ports.bus import EventPublisher
from club_realtime.application.ports.dispatch import DeliveryTarget, RoleTarget, UserTarget
from club_realtime.domain.value_objects.enums import UserRole
from club_realtime.infrastructure.bus.serializer import serialize_envelope

logger = logging.getLogger(__name__)


class RedisFanoutDispatcher:
    """Publishes ``(target, event)`` envelopes instead of writing to sockets.

    Each process subscribes to the same channel and hands envelopes to its own
    ``LocalDispatcher``. A single publisher task keeps envelopes in call order.
    """

    def __init__(self, publisher: EventPublisher, channel: str) -> None:
        self._publisher = publisher
        self._channel = channel
        self._queue: asyncio.Queue[str] = asyncio.Queue()
        self._task: asyncio.Task[None] | None = None

    async def start(self) -> None:
        self._task = asyncio.create_task(self._run(), name="redis-fanout-publisher")
        logger.info("Fan-out publisher started on channel=%s", self._channel)

    async def stop(self) -> None:
        if self._task:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            logger.info("Fan-out publisher stopped (%d envelopes dropped)", self._queue.qsize())

    def deliver(self, target: DeliveryTarget, event: DispatchEvent) -> None:
        self._queue.put_nowait(serialize_envelope(target, event))

    def deliver_to_user(self, user_id: int, event: DispatchEvent) -> None:
        self.deliver(UserTarget(user_id), event)

    def deliver_to_role(self, role: UserRole, event: DispatchEvent) -> None:
        self.deliver(RoleTarget(role), event)

    async def _run(self) -> None:
        while True:
            raw = await self._queue.get()
            try:
                await self._publisher.publish(self._channel, raw)
            except Exception:  # noqa: BLE001
                logger.warning("Fan-out publish failed, event dropped", exc_info=True)
            finally:
                self._queue.task_done()
