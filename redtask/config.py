"""Configuration settings for redtask.

Uses Pydantic BaseSettings so every value can come from the environment
or a local ``.env`` file.
"""

from functools import lru_cache
from enum import Enum

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogLevelEnum(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="REDTASK_",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="redtask", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    # ===== Store =====
    redis_url: str = Field(default="redis://127.0.0.1:6379/0", description="Redis connection URL")
    socket_timeout: float | None = Field(default=5.0, description="Redis socket timeout in seconds")

    # ===== Logging =====
    log_level: LogLevelEnum | None = Field(default=None, description="Logging level override")
    log_json: bool = Field(default=False, description="Emit JSON log lines")

    @field_validator("redis_url")
    @classmethod
    def validate_redis_url(cls, v: str) -> str:
        if not v.startswith(("redis://", "rediss://", "unix://")):
            raise ValueError("redis_url must use the redis://, rediss:// or unix:// scheme")
        return v


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings (read once)."""
    return Settings()
