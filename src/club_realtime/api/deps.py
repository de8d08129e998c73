"""Request-scoped dependencies: unit of work, caller identity, dispatcher."""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Annotated, AsyncIterator

import jwt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from club_realtime.application.dto.principal import Principal
from club_realtime.application.ports.auth import TokenVerifier
from club_realtime.application.ports.dispatch import Dispatcher
from club_realtime.config import settings
from club_realtime.infrastructure.auth.hs256_verifier import HS256Verifier
from club_realtime.infrastructure.db.session import AsyncSessionLocal
from club_realtime.infrastructure.db.uow import SqlAlchemyUoW

logger = logging.getLogger(__name__)

_bearer_scheme = HTTPBearer()


async def get_uow() -> AsyncIterator[SqlAlchemyUoW]:
    async with SqlAlchemyUoW(AsyncSessionLocal) as uow:
        yield uow


UoWDep = Annotated[SqlAlchemyUoW, Depends(get_uow)]


@lru_cache
def get_verifier() -> TokenVerifier:
    return HS256Verifier(settings.JWT_SECRET, settings.JWT_ALGORITHM)


async def get_current_principal(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(_bearer_scheme)],
) -> Principal:
    try:
        return await get_verifier().verify(credentials.credentials)
    except (jwt.InvalidTokenError, KeyError, ValueError) as exc:
        logger.debug("Rejected bearer token: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]


def get_dispatcher(request: Request) -> Dispatcher:
    """The dispatcher chosen at startup: local sockets, or Redis fan-out."""
    return request.app.state.dispatcher


DispatcherDep = Annotated[Dispatcher, Depends(get_dispatcher)]
