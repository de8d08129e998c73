from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import redis.asyncio as aioredis
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from club_realtime.api.middleware.request_context import RequestContextMiddleware
from club_realtime.api.routers import banned_guests, chat, health, notifications, ws
from club_realtime.application.exceptions import AppError
from club_realtime.config import settings
from club_realtime.infrastructure.bus.redis_pubsub import (
    RedisPubSubPublisher,
    RedisPubSubSubscriber,
)
from club_realtime.infrastructure.db.session import dispose_engine
from club_realtime.infrastructure.dispatch.local import LocalDispatcher
from club_realtime.infrastructure.dispatch.redis_fanout import RedisFanoutDispatcher
from club_realtime.infrastructure.ws.manager import ConnectionManager

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup / shutdown lifecycle.

    The connection registry is created here and owned by the app; routes reach
    it through ``app.state``.
    """
    registry = ConnectionManager()
    local = LocalDispatcher(registry)
    app.state.registry = registry
    app.state.redis = None
    app.state.dispatcher = local

    subscriber: RedisPubSubSubscriber | None = None
    fanout: RedisFanoutDispatcher | None = None
    if settings.FANOUT_BACKEND == "redis":
        app.state.redis = aioredis.from_url(settings.REDIS_URL, decode_responses=True)
        subscriber = RedisPubSubSubscriber(
            app.state.redis,
            settings.REDIS_PUBSUB_CHANNEL,
            local.deliver,
        )
        await subscriber.start()
        fanout = RedisFanoutDispatcher(
            RedisPubSubPublisher(app.state.redis),
            settings.REDIS_PUBSUB_CHANNEL,
        )
        await fanout.start()
        app.state.dispatcher = fanout
    logger.info("Real-time delivery ready (fanout=%s)", settings.FANOUT_BACKEND)

    yield

    await registry.close_all()
    if fanout is not None:
        await fanout.stop()
    if subscriber is not None:
        await subscriber.stop()
    if app.state.redis is not None:
        await app.state.redis.aclose()
        logger.info("Redis connection pool closed")
    await dispose_engine()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Club Security Realtime Service",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)

    _register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(chat.router)
    app.include_router(notifications.router)
    app.include_router(banned_guests.router)
    app.include_router(ws.router)

    return app


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def _app_error(_req: Request, exc: AppError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    @app.exception_handler(SQLAlchemyError)
    async def _storage(req: Request, exc: SQLAlchemyError) -> JSONResponse:
        logger.error("Storage error on %s %s", req.method, req.url.path, exc_info=exc)
        return JSONResponse(status_code=500, content={"detail": "Storage unavailable"})
