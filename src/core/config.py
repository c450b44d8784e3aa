"""Application configuration."""

import warnings
from typing import Literal, Self

from pydantic import HttpUrl, computed_field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ADMIN_USERNAME = "admin"
DEFAULT_ADMIN_PASSWORD = "admin123"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    # Application
    PROJECT_NAME: str = "iptvRelay"
    SERVER_PORT: int = 8000
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    LOG_LEVEL: str = "INFO"
    TIMEZONE: str = "Asia/Shanghai"

    # Sentry
    SENTRY_DSN: HttpUrl | None = None

    # Redis
    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_CLIENT_TIMEOUT_SEC: float = 5.0

    # Admin
    ADMIN_USERNAME: str = DEFAULT_ADMIN_USERNAME
    ADMIN_PASSWORD: str = DEFAULT_ADMIN_PASSWORD

    # Session
    SESSION_COOKIE_NAME: str = "admin_session"
    SESSION_COOKIE_PATH: str = "/admin"
    SESSION_COOKIE_SECURE: bool = False
    SESSION_TTL_DAYS: int = 7  # 滑动过期窗口
    SESSION_ID_BYTES: int = 32

    # Refresh
    DEFAULT_INTERVAL_HOURS: int = 24
    LOG_MAX_ENTRIES: int = 100
    BATCH_PACING_SEC: float = 1.0  # 批量刷新条目间隔
    FETCH_TIMEOUT_SEC: float = 30.0
    FETCH_MAX_ATTEMPTS: int = 2  # 仅对网络错误重试
    FETCH_USER_AGENT: str = "iptvRelay/0.1 (+playlist refresher)"
    PLAYLIST_CACHE_MAX_AGE_SEC: int = 3600
    SCHEDULER_TICK_SEC: int = 3600  # Beat 检查是否到期的频率

    # Celery Settings
    CELERY_BROKER_URL: str | None = None  # 默认使用 REDIS_URL
    CELERY_RESULT_BACKEND: str | None = None  # 默认使用 REDIS_URL
    CELERY_TASK_SERIALIZER: str = "json"
    CELERY_RESULT_SERIALIZER: str = "json"
    CELERY_ACCEPT_CONTENT: list[str] = ["json"]
    CELERY_TASK_DEFAULT_RETRY_DELAY: int = 60
    CELERY_TASK_MAX_RETRIES: int = 3

    WORKER_REFRESH_CONCURRENCY: int = 1

    @computed_field
    @property
    def celery_broker_url(self) -> str:
        """获取 Celery Broker URL，默认使用 Redis URL。"""
        return self.CELERY_BROKER_URL or self.REDIS_URL

    @computed_field
    @property
    def celery_result_backend(self) -> str:
        """获取 Celery Result Backend URL，默认使用 Redis URL。"""
        return self.CELERY_RESULT_BACKEND or self.REDIS_URL

    @computed_field
    @property
    def session_ttl_seconds(self) -> int:
        return self.SESSION_TTL_DAYS * 24 * 60 * 60

    def _check_default_credential(self, var_name: str, value: str, default: str) -> None:
        if value == default:
            message = (
                f'The value of {var_name} is the built-in default "{default}", '
                "for security, please change it, at least for deployments."
            )
            warnings.warn(message, stacklevel=1)

    @model_validator(mode="after")
    def _warn_default_credentials(self) -> Self:
        if self.ENVIRONMENT != "local":
            self._check_default_credential(
                "ADMIN_PASSWORD", self.ADMIN_PASSWORD, DEFAULT_ADMIN_PASSWORD
            )
        return self

    @model_validator(mode="after")
    def _check_positive_limits(self) -> Self:
        if self.DEFAULT_INTERVAL_HOURS < 1:
            raise ValueError("DEFAULT_INTERVAL_HOURS must be >= 1")
        if self.LOG_MAX_ENTRIES < 1:
            raise ValueError("LOG_MAX_ENTRIES must be >= 1")
        if self.FETCH_MAX_ATTEMPTS < 1:
            raise ValueError("FETCH_MAX_ATTEMPTS must be >= 1")
        return self


settings = Settings()


def get_settings() -> Settings:
    """获取配置依赖。"""
    return settings
