"""Source module dependencies."""

import asyncio

from fastapi import Depends

from src.core.application.dependencies import get_kv_client
from src.core.config import Settings, get_settings
from src.core.domain.clock import Clock, utc_now
from src.core.domain.ports.kv import KVClient
from src.modules.logs.application.service import ActivityLogService
from src.modules.logs.infrastructure.mappers import LogEntryMapper
from src.modules.logs.infrastructure.repositories import KVEventLogRepository
from src.modules.sources.application.batch_service import ScheduledRefreshJob, Sleep
from src.modules.sources.application.refresh_service import RefreshService
from src.modules.sources.domain.fetcher import ContentFetcher
from src.modules.sources.infrastructure.fetchers import HttpContentFetcher
from src.modules.sources.infrastructure.mappers import SourceRecordMapper
from src.modules.sources.infrastructure.refresh_queue import CeleryRefreshQueue
from src.modules.sources.infrastructure.repositories import (
    KVContentCacheRepository,
    KVRefreshScheduleRepository,
    KVSourceCatalogRepository,
)


def get_source_record_mapper() -> SourceRecordMapper:
    return SourceRecordMapper()


async def get_content_cache_repository(
    kv: KVClient = Depends(get_kv_client),
) -> KVContentCacheRepository:
    return KVContentCacheRepository(kv)


async def get_source_catalog_repository(
    kv: KVClient = Depends(get_kv_client),
    mapper: SourceRecordMapper = Depends(get_source_record_mapper),
    content_cache: KVContentCacheRepository = Depends(get_content_cache_repository),
) -> KVSourceCatalogRepository:
    return KVSourceCatalogRepository(kv, mapper, content_cache)


async def get_refresh_schedule_repository(
    kv: KVClient = Depends(get_kv_client),
    settings: Settings = Depends(get_settings),
) -> KVRefreshScheduleRepository:
    return KVRefreshScheduleRepository(
        kv, default_interval_hours=settings.DEFAULT_INTERVAL_HOURS
    )


async def get_refresh_queue() -> CeleryRefreshQueue:
    return CeleryRefreshQueue()


# ============ Worker / CLI 组装 ============


def build_content_fetcher(settings: Settings) -> HttpContentFetcher:
    return HttpContentFetcher(
        timeout=settings.FETCH_TIMEOUT_SEC,
        user_agent=settings.FETCH_USER_AGENT,
        max_attempts=settings.FETCH_MAX_ATTEMPTS,
    )


def build_refresh_service(
    kv: KVClient,
    settings: Settings,
    clock: Clock = utc_now,
    fetcher: ContentFetcher | None = None,
) -> RefreshService:
    """组装 RefreshService（Celery 任务与命令行脚本在 FastAPI 之外使用）。"""
    content_cache = KVContentCacheRepository(kv)
    catalog = KVSourceCatalogRepository(kv, SourceRecordMapper(), content_cache)
    activity_log = ActivityLogService(
        KVEventLogRepository(kv, LogEntryMapper(), max_entries=settings.LOG_MAX_ENTRIES),
        clock,
    )
    return RefreshService(
        catalog,
        content_cache,
        fetcher or build_content_fetcher(settings),
        activity_log,
        clock,
    )


def build_scheduled_refresh_job(
    kv: KVClient,
    settings: Settings,
    clock: Clock = utc_now,
    fetcher: ContentFetcher | None = None,
    sleep: Sleep = asyncio.sleep,
) -> ScheduledRefreshJob:
    refresh_service = build_refresh_service(kv, settings, clock, fetcher)
    return ScheduledRefreshJob(
        refresh_service.catalog,
        KVRefreshScheduleRepository(
            kv, default_interval_hours=settings.DEFAULT_INTERVAL_HOURS
        ),
        refresh_service,
        pacing_sec=settings.BATCH_PACING_SEC,
        clock=clock,
        sleep=sleep,
    )
