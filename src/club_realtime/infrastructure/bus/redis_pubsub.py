"""Redis Pub/Sub transport for cross-process fan-out."""
from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Callable

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from club_realtime.application.dto.events import DispatchEvent
from club_realtime.application.ports.dispatch import DeliveryTarget
from club_realtime.infrastructure.bus.serializer import deserialize_envelope

logger = logging.getLogger(__name__)

RESUBSCRIBE_DELAY_SECONDS = 1.0


class RedisPubSubPublisher:
    """Implements application.ports.bus.EventPublisher."""

    def __init__(self, redis: aioredis.Redis) -> None:
        self._redis = redis

    async def publish(self, channel: str, message: str) -> None:
        receivers = await self._redis.publish(channel, message)
        if not receivers:
            logger.debug("Envelope published on %s with no subscribers", channel)


EnvelopeHandler = Callable[[DeliveryTarget, DispatchEvent], None]


class RedisPubSubSubscriber:
    """Feeds envelopes from a Redis channel into this process's dispatcher.

    Envelopes published while the subscription is down are lost; the
    subscriber resubscribes after a short delay when the connection drops.
    """

    def __init__(
        self,
        redis: aioredis.Redis,
        channel: str,
        on_envelope: EnvelopeHandler,
    ) -> None:
        self._redis = redis
        self._channel = channel
        self._on_envelope = on_envelope
        self._task: asyncio.Task[None] | None = None

    async def start(self) -> None:
        self._task = asyncio.create_task(self._run(), name="redis-pubsub-subscriber")
        logger.info("Fan-out subscriber started on channel=%s", self._channel)

    async def stop(self) -> None:
        if self._task:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            logger.info("Fan-out subscriber stopped")

    async def _run(self) -> None:
        while True:
            try:
                await self._consume()
            except RedisError:
                logger.warning(
                    "Fan-out subscription lost, retrying in %.0fs",
                    RESUBSCRIBE_DELAY_SECONDS,
                    exc_info=True,
                )
                await asyncio.sleep(RESUBSCRIBE_DELAY_SECONDS)

    async def _consume(self) -> None:
        async with self._redis.pubsub(ignore_subscribe_messages=True) as pubsub:
            await pubsub.subscribe(self._channel)
            async for message in pubsub.listen():
                self._handle(message["data"])

    def _handle(self, raw: str | bytes) -> None:
        try:
            target, event = deserialize_envelope(raw)
            self._on_envelope(target, event)
        except Exception:
            logger.exception("Dropping fan-out envelope: %.200r", raw)
