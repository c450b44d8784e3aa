"""播放列表刷新 Celery 任务。

包含：
- 调度检查：Beat 周期触发，刷新间隔到期时投递批量刷新
- 批量刷新：串行刷新全部源
- 单源刷新：管理后台“立即更新”的后台执行
"""

import asyncio

from celery import shared_task
from loguru import logger

from src.core.config import settings
from src.core.infrastructure.celery.queues import Queues
from src.core.infrastructure.celery.retry import REFRESH_RETRY_POLICY


@shared_task(
    name="src.modules.sources.tasks.dispatch_scheduled_refresh",
    bind=True,
    max_retries=0,  # 调度任务不重试，下个 tick 会再检查
    queue=Queues.SCHEDULE,
)
def dispatch_scheduled_refresh(_self: object) -> bool:
    """检查刷新间隔是否到期，到期则投递批量刷新。

    Returns:
        是否投递了批量刷新
    """
    return asyncio.run(_dispatch_scheduled_refresh_async())


async def _dispatch_scheduled_refresh_async() -> bool:
    from src.core.infrastructure.redis import get_async_redis_client
    from src.modules.sources.infrastructure.dependencies import (
        build_scheduled_refresh_job,
    )

    async with get_async_redis_client(
        timeout=settings.REDIS_CLIENT_TIMEOUT_SEC
    ) as redis_client:
        job = build_scheduled_refresh_job(redis_client, settings)
        if not await job.is_due():
            logger.debug("Scheduled refresh not due yet")
            return False

    run_scheduled_refresh.delay()
    logger.info("Scheduled refresh is due, batch enqueued")
    return True


@shared_task(
    name="src.modules.sources.tasks.run_scheduled_refresh",
    bind=True,
    **REFRESH_RETRY_POLICY,
    queue=Queues.REFRESH,
)
def run_scheduled_refresh(_self: object) -> dict[str, object]:
    """执行一次批量刷新。"""
    return asyncio.run(_run_scheduled_refresh_async())


async def _run_scheduled_refresh_async() -> dict[str, object]:
    from src.core.infrastructure.redis import get_async_redis_client
    from src.modules.sources.infrastructure.dependencies import (
        build_scheduled_refresh_job,
    )

    async with get_async_redis_client(
        timeout=settings.REDIS_CLIENT_TIMEOUT_SEC
    ) as redis_client:
        job = build_scheduled_refresh_job(redis_client, settings)
        summary = await job.run_once()
    return summary.to_dict()


@shared_task(
    name="src.modules.sources.tasks.refresh_source",
    bind=True,
    **REFRESH_RETRY_POLICY,
    queue=Queues.REFRESH,
)
def refresh_source(_self: object, directory_name: str) -> dict[str, object]:
    """刷新单个源。

    Args:
        directory_name: 源目录名
    """
    return asyncio.run(_refresh_source_async(directory_name))


async def _refresh_source_async(directory_name: str) -> dict[str, object]:
    from src.core.infrastructure.redis import get_async_redis_client
    from src.modules.sources.domain.exceptions import SourceNotFoundError
    from src.modules.sources.infrastructure.dependencies import build_refresh_service

    async with get_async_redis_client(
        timeout=settings.REDIS_CLIENT_TIMEOUT_SEC
    ) as redis_client:
        service = build_refresh_service(redis_client, settings)
        try:
            result = await service.refresh_by_name(directory_name)
        except SourceNotFoundError:
            # 入队后源已被删除
            logger.warning(f"Skip refresh, source no longer exists: {directory_name}")
            return {"directory_name": directory_name, "success": False, "skipped": True}

    return {
        "directory_name": directory_name,
        "success": result.success,
        "error_message": result.error_message,
        "skipped": result.skipped,
    }
