from __future__ import annotations

from typing import Literal

from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    POSTGRES_USER: str
    POSTGRES_PASSWORD: str
    POSTGRES_DB: str
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432

    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_POOL_RECYCLE: int = 300

    REDIS_URL: str = "redis://localhost:6379/0"

    JWT_SECRET: str = ""
    JWT_ALGORITHM: str = "HS256"

    CORS_ORIGINS: list[str] = ["*"]

    HOST: str = "0.0.0.0"
    PORT: int = 5000
    LOG_LEVEL: str = "info"

    WS_PATH: str = "/ws"
    # "frame" trusts the userId/role in the auth frame, "token" requires a signed JWT
    WS_AUTH_MODE: Literal["frame", "token"] = "frame"
    WS_HEARTBEAT_SECONDS: int = 30
    WS_SEND_QUEUE_SIZE: int = 256

    # "local" delivers only to sockets held by this process
    FANOUT_BACKEND: Literal["local", "redis"] = "local"
    REDIS_PUBSUB_CHANNEL: str = "club.realtime.fanout"

    @property
    def database_url(self) -> str:
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.POSTGRES_DB}"
        )

    model_config = ConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()  # type: ignore[call-arg]
