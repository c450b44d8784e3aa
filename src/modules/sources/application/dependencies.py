"""Source module application dependencies."""

from typing import NoReturn

from fastapi import Depends

from src.core.application.dependencies import get_clock
from src.core.domain.clock import Clock
from src.modules.logs.application.dependencies import get_activity_log_service
from src.modules.logs.application.service import ActivityLogService
from src.modules.sources.application.handlers import (
    CreateSourceHandler,
    DeleteSourceHandler,
    RefreshAllHandler,
    RefreshSourceHandler,
    UpdateIntervalHandler,
)
from src.modules.sources.application.services import SourceQueryService
from src.modules.sources.domain.ports import RefreshQueue
from src.modules.sources.domain.repository import (
    ContentCacheRepository,
    RefreshScheduleRepository,
    SourceCatalogRepository,
)


def _missing_dependency(name: str) -> NoReturn:
    raise RuntimeError(f"Missing dependency override for {name}")


async def get_source_catalog_repository() -> SourceCatalogRepository:
    _missing_dependency("SourceCatalogRepository")


async def get_content_cache_repository() -> ContentCacheRepository:
    _missing_dependency("ContentCacheRepository")


async def get_refresh_schedule_repository() -> RefreshScheduleRepository:
    _missing_dependency("RefreshScheduleRepository")


async def get_refresh_queue() -> RefreshQueue:
    _missing_dependency("RefreshQueue")


async def get_source_query_service(
    catalog: SourceCatalogRepository = Depends(get_source_catalog_repository),
    content_cache: ContentCacheRepository = Depends(get_content_cache_repository),
    schedule: RefreshScheduleRepository = Depends(get_refresh_schedule_repository),
) -> SourceQueryService:
    return SourceQueryService(catalog, content_cache, schedule)


async def get_create_source_handler(
    catalog: SourceCatalogRepository = Depends(get_source_catalog_repository),
    activity_log: ActivityLogService = Depends(get_activity_log_service),
    clock: Clock = Depends(get_clock),
) -> CreateSourceHandler:
    return CreateSourceHandler(catalog, activity_log, clock)


async def get_delete_source_handler(
    catalog: SourceCatalogRepository = Depends(get_source_catalog_repository),
    activity_log: ActivityLogService = Depends(get_activity_log_service),
) -> DeleteSourceHandler:
    return DeleteSourceHandler(catalog, activity_log)


async def get_refresh_source_handler(
    catalog: SourceCatalogRepository = Depends(get_source_catalog_repository),
    refresh_queue: RefreshQueue = Depends(get_refresh_queue),
) -> RefreshSourceHandler:
    return RefreshSourceHandler(catalog, refresh_queue)


async def get_refresh_all_handler(
    refresh_queue: RefreshQueue = Depends(get_refresh_queue),
) -> RefreshAllHandler:
    return RefreshAllHandler(refresh_queue)


async def get_update_interval_handler(
    schedule: RefreshScheduleRepository = Depends(get_refresh_schedule_repository),
    activity_log: ActivityLogService = Depends(get_activity_log_service),
) -> UpdateIntervalHandler:
    return UpdateIntervalHandler(schedule, activity_log)
