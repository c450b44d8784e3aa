"""Health check result types used by GET /health."""

from enum import StrEnum

from pydantic import BaseModel, Field


class HealthStatus(StrEnum):
    OK = "ok"
    ERROR = "error"


class RedisHealthResult(BaseModel):
    """Redis 连通性检查结果。

    Redis 同时是 KV 存储与 Celery Broker，不可用时整个服务视为 unhealthy。
    """

    status: HealthStatus
    connected: bool
    version: str | None = Field(None, description="redis_version from INFO server")
    latency_ms: float | None = Field(None, description="PING + INFO 往返耗时")
    error: str | None = None

    @property
    def is_healthy(self) -> bool:
        return self.status is HealthStatus.OK

    def to_dict(self) -> dict[str, str | bool | float | None]:
        return self.model_dump(mode="json")
