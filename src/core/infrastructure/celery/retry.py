"""Retry policy for refresh tasks.

上游抓取失败由 RefreshService 转为结果并写入活动日志，不会触发任务重试；
只有存储（Redis）与 Broker 故障才值得整任务重跑。
"""

from __future__ import annotations

from typing import Any

from kombu.exceptions import OperationalError as KombuOperationalError
from redis.exceptions import RedisError

from src.core.infrastructure.redis.client import RedisUnavailableError

STORE_FAILURES: tuple[type[BaseException], ...] = (
    RedisUnavailableError,
    RedisError,
    KombuOperationalError,
)

# shared_task(**REFRESH_RETRY_POLICY)
REFRESH_RETRY_POLICY: dict[str, Any] = {
    "autoretry_for": STORE_FAILURES,
    "max_retries": 2,
    "retry_backoff": True,
    "retry_backoff_max": 300,
    "retry_jitter": True,
}
