"""Redis-backed KVClient.

iptvRelay 的全部状态（源目录、缓存内容、会话、活动日志、刷新间隔）都是
Redis 中的字符串值，这里只封装用到的那一小部分命令：
- get / set（可选 TTL）/ delete
- JSON 文档读写（UTF-8 原样保存，不转义中文）
- 连通性检查：Web 进程的 /health，以及 Celery 任务和命令行脚本的启动前检查
"""

from __future__ import annotations

import asyncio
import json
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import TYPE_CHECKING, Any

import redis.asyncio as aioredis
from loguru import logger
from redis.exceptions import RedisError

if TYPE_CHECKING:
    from redis.asyncio import Redis

from src.core.config import settings
from src.core.infrastructure.health import HealthStatus, RedisHealthResult


class RedisUnavailableError(RuntimeError):
    """Redis 连接失败或 ping 超时。"""


class RedisClient:
    """KVClient 的 Redis 实现，连接池在第一次使用时创建。"""

    def __init__(self, url: str | None = None, *, socket_timeout: float = 10.0):
        self._url = url or settings.REDIS_URL
        self._socket_timeout = socket_timeout
        self._pool: Redis | None = None

    @property
    def client(self) -> Redis:
        if self._pool is None:
            self._pool = aioredis.from_url(
                self._url,
                encoding="utf-8",
                decode_responses=True,
                socket_timeout=self._socket_timeout,
                socket_connect_timeout=min(self._socket_timeout, 5.0),
                retry_on_timeout=True,
            )
        return self._pool

    async def close(self) -> None:
        if self._pool is None:
            return
        pool, self._pool = self._pool, None
        await pool.aclose()

    async def ping(self, timeout: float | None = None) -> None:
        """Ping Redis; any failure is raised as RedisUnavailableError."""
        try:
            pong = await asyncio.wait_for(self.client.ping(), timeout=timeout)
        except TimeoutError as e:
            raise RedisUnavailableError(f"Redis ping timed out after {timeout}s") from e
        except Exception as e:
            raise RedisUnavailableError(f"Redis ping failed: {e}") from e
        if not pong:
            raise RedisUnavailableError("Redis ping returned no PONG")

    @asynccontextmanager
    async def ensure_available(
        self,
        *,
        timeout: float = 5.0,
        close_on_exit: bool = False,
    ) -> AsyncGenerator[RedisClient, None]:
        """进入上下文前先 ping，失败抛出 RedisUnavailableError。

        close_on_exit=True 时无论成功失败都会在退出时关闭连接池，
        用于每次 asyncio.run() 都是新事件循环的 Celery 任务与脚本。
        """
        try:
            await self.ping(timeout=timeout)
            yield self
        finally:
            if close_on_exit:
                await self.close()

    async def health_check(self) -> RedisHealthResult:
        started = time.perf_counter()
        try:
            await self.ping(timeout=2.0)
            server_info = await self.client.info("server")
        except (RedisUnavailableError, RedisError) as e:
            logger.warning(f"Redis health check failed: {e}")
            return RedisHealthResult(
                status=HealthStatus.ERROR, connected=False, error=str(e)
            )
        return RedisHealthResult(
            status=HealthStatus.OK,
            connected=True,
            version=server_info.get("redis_version", "unknown"),
            latency_ms=round((time.perf_counter() - started) * 1000, 2),
        )

    # ============ KVClient ============

    async def get(self, key: str) -> str | None:
        return await self.client.get(key)

    async def set(
        self,
        key: str,
        value: str,
        ex: int | timedelta | None = None,
    ) -> bool:
        """写入字符串值，ex 为过期时间（秒或 timedelta），None 表示永不过期。"""
        return bool(await self.client.set(key, value, ex=ex))

    async def delete(self, *keys: str) -> int:
        if not keys:
            return 0
        return await self.client.delete(*keys)

    async def get_json(self, key: str) -> Any | None:
        raw = await self.get(key)
        return None if raw is None else json.loads(raw)

    async def set_json(
        self,
        key: str,
        value: Any,
        ex: int | timedelta | None = None,
    ) -> bool:
        return await self.set(key, json.dumps(value, ensure_ascii=False), ex=ex)


@asynccontextmanager
async def get_async_redis_client(
    *,
    timeout: float = 5.0,
    url: str | None = None,
) -> AsyncGenerator[RedisClient, None]:
    """为单次任务创建独立的 RedisClient，ping 通过后交出，退出时关闭。"""
    client = RedisClient(url=url)
    async with client.ensure_available(timeout=timeout, close_on_exit=True):
        yield client


# Web 进程内共享的连接池
redis_client = RedisClient()


def get_redis_client() -> RedisClient:
    return redis_client
